# File: app/api/v1/endpoints/badges.py
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app import crud, schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User
from app.services.badge_generation import BadgeGenerationError, generate_and_save_badge
from app.services.storage import StorageError
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/generate", response_model=schemas.ParticipantBadge)
def generate_badge(
    *,
    db: Session = Depends(get_db),
    request: schemas.BadgeGenerateRequest,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    """Generate (or regenerate) the badge for one submission."""
    submission = deps.ensure_owner(
        crud.form_submission.get(db, id=request.form_submission_id), current_user, "Submission"
    )
    deps.ensure_owner(crud.badge_template.get(db, id=request.badge_template_id), current_user, "Template")
    try:
        return generate_and_save_badge(
            db,
            user_id=current_user.id,
            submission=submission,
            badge_template_id=request.badge_template_id,
        )
    except (BadgeGenerationError, StorageError) as e:
        logger.error(f"Badge generation failed for submission {submission.id}: {str(e)}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to generate badge: {str(e)}")

@router.get("/submission/{submission_id}", response_model=schemas.ParticipantBadge)
def get_badge_for_submission(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    badge = crud.participant_badge.get_by_submission(db, form_submission_id=submission_id)
    if not badge:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Badge not found")
    submission = crud.form_submission.get(db, id=submission_id)
    if badge.user_id != current_user.id and (submission is None or submission.participant_user_id != current_user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
    return badge

@router.get("/event/{event_id}", response_model=List[schemas.ParticipantBadge])
def list_event_badges(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    deps.ensure_owner(crud.event.get(db, id=event_id), current_user, "Event")
    return crud.participant_badge.get_by_event(db, event_id=event_id)

@router.post("/lookup", response_model=List[schemas.ParticipantBadge])
def lookup_badges(
    *,
    db: Session = Depends(get_db),
    request: schemas.BadgeLookupRequest,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    badges = crud.participant_badge.get_by_submissions(db, form_submission_ids=request.form_submission_ids)
    return [badge for badge in badges if badge.user_id == current_user.id]

@router.get("/by-url", response_model=schemas.ParticipantBadge)
def get_badge_by_url(
    *,
    db: Session = Depends(get_db),
    url: str,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    """Resolve a scanned badge QR code."""
    badge = crud.participant_badge.get_by_image_url(db, badge_image_url=url)
    return deps.ensure_owner(badge, current_user, "Badge")

@router.delete("/{badge_id}")
def delete_badge(
    *,
    db: Session = Depends(get_db),
    badge_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    deps.ensure_owner(crud.participant_badge.get(db, id=badge_id), current_user, "Badge")
    crud.participant_badge.remove(db, id=badge_id)
    return {"message": "Badge deleted successfully"}
