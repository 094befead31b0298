# File: app/api/v1/endpoints/dispatch.py
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User
from app.services import dispatch_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.put("/", response_model=schemas.DispatchSubmission)
def save_dispatch(
    *,
    db: Session = Depends(get_db),
    dispatch_in: schemas.DispatchSave,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    """Replace the submission -> committee members map for an event form."""
    deps.ensure_owner(crud.event.get(db, id=dispatch_in.event_id), current_user, "Event")
    try:
        row = dispatch_service.save_dispatch(
            db,
            user_id=current_user.id,
            event_id=dispatch_in.event_id,
            form_id=dispatch_in.form_id,
            dispatching=dispatch_in.dispatching,
            deadline=dispatch_in.deadline,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return dispatch_service.dispatch_to_dict(row)

@router.get("/", response_model=schemas.DispatchSubmission)
def get_dispatch(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    form_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    row = crud.dispatch.get_for(db, user_id=current_user.id, event_id=event_id, form_id=form_id)
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dispatch not found")
    return dispatch_service.dispatch_to_dict(row)

@router.get("/mine", response_model=List[schemas.DispatchSubmission])
def list_my_dispatches(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    return [dispatch_service.dispatch_to_dict(row) for row in crud.dispatch.get_by_user(db, user_id=current_user.id)]

@router.get("/me/items", response_model=List[schemas.DispatchedItem])
def list_items_dispatched_to_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return dispatch_service.get_dispatched_items_for_reviewer(db, current_user.email)

@router.get("/me/items/by-event", response_model=Dict[int, List[schemas.DispatchedItem]])
def list_items_dispatched_to_me_by_event(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return dispatch_service.get_dispatched_items_by_event(db, current_user.email)

@router.get("/{dispatch_id}/progress", response_model=List[schemas.SubmissionReviewProgress])
def get_dispatch_progress(
    *,
    db: Session = Depends(get_db),
    dispatch_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    row = deps.ensure_owner(crud.dispatch.get(db, id=dispatch_id), current_user, "Dispatch")
    return dispatch_service.review_progress(db, row)

@router.delete("/{dispatch_id}")
def delete_dispatch(
    *,
    db: Session = Depends(get_db),
    dispatch_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    deps.ensure_owner(crud.dispatch.get(db, id=dispatch_id), current_user, "Dispatch")
    crud.dispatch.remove(db, id=dispatch_id)
    return {"message": "Dispatch deleted successfully"}
