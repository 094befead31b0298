from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app import crud, schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User

router = APIRouter()

@router.get("/", response_model=List[schemas.BadgeTemplate])
def get_badge_templates(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_organizer),
    skip: int = 0,
    limit: int = 100,
) -> Any:
    """
    Retrieve badge templates.
    """
    return crud.badge_template.get_multi_by_owner(db, user_id=current_user.id, skip=skip, limit=limit)

@router.post("/", response_model=schemas.BadgeTemplate, status_code=status.HTTP_201_CREATED)
def create_badge_template(
    *,
    db: Session = Depends(get_db),
    template_in: schemas.BadgeTemplateCreate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    """
    Create new badge template.
    """
    if crud.badge_template.get_by_title(db, user_id=current_user.id, title=template_in.title):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Template with this title already exists"
        )
    return crud.badge_template.create(db, obj_in=template_in, user_id=current_user.id)

@router.get("/{template_id}", response_model=schemas.BadgeTemplate)
def get_badge_template(
    *,
    db: Session = Depends(get_db),
    template_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    return deps.ensure_owner(crud.badge_template.get(db, id=template_id), current_user, "Template")

@router.put("/{template_id}", response_model=schemas.BadgeTemplate)
def update_badge_template(
    *,
    db: Session = Depends(get_db),
    template_id: int,
    template_in: schemas.BadgeTemplateUpdate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    template = deps.ensure_owner(crud.badge_template.get(db, id=template_id), current_user, "Template")
    return crud.badge_template.update(db, db_obj=template, obj_in=template_in)

@router.delete("/{template_id}")
def delete_badge_template(
    *,
    db: Session = Depends(get_db),
    template_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    deps.ensure_owner(crud.badge_template.get(db, id=template_id), current_user, "Template")
    crud.badge_template.remove(db, id=template_id)
    return {"message": "Template deleted successfully"}
