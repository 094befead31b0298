# File: app/api/v1/endpoints/checkins.py
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.db.database import get_db
from app.models.form_submission import FormSubmission
from app.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _checkin_target(db: Session, event_id: int, submission_id: int, current_user: User) -> FormSubmission:
    submission = deps.ensure_owner(crud.form_submission.get(db, id=submission_id), current_user, "Submission")
    if event_id not in (submission.event_id, submission.accepted_event_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Submission {submission_id} is not registered for event {event_id}",
        )
    return submission


@router.post("/toggle", response_model=schemas.RegistrationCheckin)
def toggle_checkin(
    *,
    db: Session = Depends(get_db),
    checkin_in: schemas.CheckinToggle,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    """Flip a registration between checked in and not, for one day or all days."""
    deps.ensure_owner(crud.event.get(db, id=checkin_in.event_id), current_user, "Event")
    _checkin_target(db, checkin_in.event_id, checkin_in.form_submission_id, current_user)
    checkin = crud.checkin.toggle(
        db,
        user_id=current_user.id,
        event_id=checkin_in.event_id,
        form_submission_id=checkin_in.form_submission_id,
        checked_in_by=current_user.email,
        event_day_id=checkin_in.event_day_id,
        event_day_label=checkin_in.event_day_label,
    )
    logger.info(f"Submission {checkin.form_submission_id} check-in is now {checkin.checkin_status}")
    return checkin


@router.post("/bulk-toggle", response_model=schemas.BulkCheckinResult)
def bulk_toggle_checkin(
    *,
    db: Session = Depends(get_db),
    checkin_in: schemas.CheckinBulkToggle,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    """Toggle several registrations; ones that cannot be checked in are reported, not fatal."""
    deps.ensure_owner(crud.event.get(db, id=checkin_in.event_id), current_user, "Event")
    checkins, failed = [], []
    for submission_id in checkin_in.form_submission_ids:
        try:
            _checkin_target(db, checkin_in.event_id, submission_id, current_user)
        except HTTPException as e:
            logger.warning(f"Skipping check-in for submission {submission_id}: {e.detail}")
            failed.append(submission_id)
            continue
        checkins.append(crud.checkin.toggle(
            db,
            user_id=current_user.id,
            event_id=checkin_in.event_id,
            form_submission_id=submission_id,
            checked_in_by=current_user.email,
            event_day_id=checkin_in.event_day_id,
            event_day_label=checkin_in.event_day_label,
        ))
    return {"checkins": checkins, "failed": failed}


@router.put("/status", response_model=schemas.RegistrationCheckin)
def set_checkin_status(
    *,
    db: Session = Depends(get_db),
    checkin_in: schemas.CheckinSet,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    deps.ensure_owner(crud.event.get(db, id=checkin_in.event_id), current_user, "Event")
    _checkin_target(db, checkin_in.event_id, checkin_in.form_submission_id, current_user)
    return crud.checkin.set_status(
        db,
        user_id=current_user.id,
        event_id=checkin_in.event_id,
        form_submission_id=checkin_in.form_submission_id,
        checkin_status=checkin_in.checkin_status,
        checked_in_by=current_user.email,
        event_day_id=checkin_in.event_day_id,
        event_day_label=checkin_in.event_day_label,
        notes=checkin_in.notes,
    )


@router.get("/submission/{submission_id}", response_model=List[schemas.RegistrationCheckin])
def list_submission_checkins(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    deps.ensure_owner(crud.form_submission.get(db, id=submission_id), current_user, "Submission")
    return crud.checkin.get_by_submission(db, form_submission_id=submission_id)


@router.get("/event/{event_id}", response_model=List[schemas.RegistrationCheckin])
def list_event_checkins(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    deps.ensure_owner(crud.event.get(db, id=event_id), current_user, "Event")
    return crud.checkin.get_by_event(db, event_id=event_id)


@router.get("/event/{event_id}/status-map", response_model=Dict[int, List[schemas.RegistrationCheckin]])
def get_event_checkin_status_map(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    event_day_id: Optional[str] = None,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    """Check-ins keyed by submission id for every registration of the event."""
    deps.ensure_owner(crud.event.get(db, id=event_id), current_user, "Event")
    submission_ids = [s.id for s in crud.form_submission.get_by_event(db, event_id=event_id)]
    status_map = crud.checkin.get_status_map(db, form_submission_ids=submission_ids)
    if event_day_id is not None:
        status_map = {
            submission_id: [c for c in checkins if c.event_day_id == event_day_id]
            for submission_id, checkins in status_map.items()
        }
        status_map = {k: v for k, v in status_map.items() if v}
    return status_map
