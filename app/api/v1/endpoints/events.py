from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/", response_model=List[schemas.Event])
def list_my_events(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_organizer),
    skip: int = 0,
    limit: int = 100,
) -> Any:
    return crud.event.get_multi_by_owner(db, user_id=current_user.id, skip=skip, limit=limit)

@router.get("/published", response_model=List[schemas.Event])
def list_published_events(db: Session = Depends(get_db), skip: int = 0, limit: int = 100) -> Any:
    return crud.event.get_published(db, skip=skip, limit=limit)

@router.post("/", response_model=schemas.Event, status_code=status.HTTP_201_CREATED)
def create_event(
    *,
    db: Session = Depends(get_db),
    event_in: schemas.EventCreate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    event = crud.event.create(db, obj_in=event_in, user_id=current_user.id)
    logger.info(f"Event {event.id} created by {current_user.email}")
    return event

@router.get("/{event_id}", response_model=schemas.Event)
def get_event(*, db: Session = Depends(get_db), event_id: int) -> Any:
    event = crud.event.get(db, id=event_id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event

@router.put("/{event_id}", response_model=schemas.Event)
def update_event(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    event_in: schemas.EventUpdate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    event = deps.ensure_owner(crud.event.get(db, id=event_id), current_user, "Event")
    return crud.event.update(db, db_obj=event, obj_in=event_in)

@router.delete("/{event_id}")
def delete_event(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    deps.ensure_owner(crud.event.get(db, id=event_id), current_user, "Event")
    crud.event.remove(db, id=event_id)
    return {"message": "Event deleted successfully"}
