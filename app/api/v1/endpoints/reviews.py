# File: app/api/v1/endpoints/reviews.py
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.crud.review import ReviewStatusConflict
from app.db.database import get_db
from app.models.review import ParticipantReview
from app.models.user import User
from app.services.dispatch_service import assigned_members, refresh_submission_review_state
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _is_reviewer(db: Session, participant_id: int, user: User) -> bool:
    member = crud.committee_member.get(db, id=participant_id)
    return member is not None and member.email.lower() == user.email.lower()


def _is_event_owner(db: Session, event_id: int, user: User) -> bool:
    event = crud.event.get(db, id=event_id)
    return event is not None and event.user_id == user.id


def _readable(db: Session, review: Optional[ParticipantReview], user: User) -> ParticipantReview:
    if review is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    if not (_is_reviewer(db, review.participant_id, user) or _is_event_owner(db, review.event_id, user)):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
    return review


@router.post("/", response_model=schemas.ParticipantReview)
def save_review(
    *,
    db: Session = Depends(get_db),
    review_in: schemas.ReviewSave,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    """Create or update the review for (participant, submission, form)."""
    if not crud.committee_member.get(db, id=review_in.participant_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Committee member not found")
    if not _is_reviewer(db, review_in.participant_id, current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
    assigned = assigned_members(
        db,
        event_id=review_in.event_id,
        submission_id=review_in.submission_id,
        submission_type=review_in.submission_type,
    )
    if review_in.participant_id not in assigned:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Submission is not dispatched to this committee member",
        )

    try:
        review = crud.review.save(db, obj_in=review_in, user_id=current_user.id)
    except ReviewStatusConflict as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    if review.submission_type == "submission":
        refresh_submission_review_state(db, submission_id=review.submission_id, event_id=review.event_id)
    logger.info(f"Review {review.id} saved as {review.status} by {current_user.email}")
    return review


@router.get("/me", response_model=List[schemas.ParticipantReview])
def list_my_reviews(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    member_ids = crud.committee_member.get_ids_by_email(db, email=current_user.email)
    return crud.review.get_by_participant(db, participant_ids=member_ids)


@router.get("/lookup", response_model=schemas.ParticipantReview)
def get_review_for(
    *,
    db: Session = Depends(get_db),
    participant_id: int,
    submission_id: int,
    form_id: int,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    review = crud.review.get_for(
        db, participant_id=participant_id, submission_id=submission_id, form_id=form_id
    )
    return _readable(db, review, current_user)


@router.get("/submission/{submission_id}", response_model=List[schemas.ParticipantReview])
def list_submission_reviews(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    form_id: Optional[int] = None,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    deps.ensure_owner(crud.form_submission.get(db, id=submission_id), current_user, "Submission")
    return crud.review.get_by_submission(db, submission_id=submission_id, form_id=form_id)


@router.get("/event/{event_id}", response_model=List[schemas.ParticipantReview])
def list_event_reviews(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    deps.ensure_owner(crud.event.get(db, id=event_id), current_user, "Event")
    return crud.review.get_by_event(db, event_id=event_id)


@router.get("/{review_id}", response_model=schemas.ParticipantReview)
def get_review(
    *,
    db: Session = Depends(get_db),
    review_id: int,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return _readable(db, crud.review.get(db, id=review_id), current_user)


@router.delete("/{review_id}")
def delete_review(
    *,
    db: Session = Depends(get_db),
    review_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    review = crud.review.get(db, id=review_id)
    if not review:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    if not _is_event_owner(db, review.event_id, current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
    crud.review.remove(db, id=review_id)
    return {"message": "Review deleted successfully"}
