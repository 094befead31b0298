# File: app/api/v1/endpoints/forms.py
"""Registration and evaluation form definitions share one set of routes."""
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.crud.base import CRUDBase
from app.db.database import get_db
from app.models.user import User
from app.services.form_schema import validate_answers


def build_form_router(form_crud: CRUDBase, name: str) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_model=List[schemas.Form])
    def list_forms(
        db: Session = Depends(get_db),
        current_user: User = Depends(deps.get_current_organizer),
        skip: int = 0,
        limit: int = 100,
    ) -> Any:
        return form_crud.get_multi_by_owner(db, user_id=current_user.id, skip=skip, limit=limit)

    @router.post("/", response_model=schemas.Form, status_code=status.HTTP_201_CREATED)
    def create_form(
        *,
        db: Session = Depends(get_db),
        form_in: schemas.FormCreate,
        current_user: User = Depends(deps.get_current_organizer),
    ) -> Any:
        return form_crud.create(db, obj_in=form_in, user_id=current_user.id)

    @router.get("/{form_id}", response_model=schemas.Form)
    def get_form(*, db: Session = Depends(get_db), form_id: int) -> Any:
        form = form_crud.get(db, id=form_id)
        if not form:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{name} not found")
        return form

    @router.put("/{form_id}", response_model=schemas.Form)
    def update_form(
        *,
        db: Session = Depends(get_db),
        form_id: int,
        form_in: schemas.FormUpdate,
        current_user: User = Depends(deps.get_current_organizer),
    ) -> Any:
        form = deps.ensure_owner(form_crud.get(db, id=form_id), current_user, name)
        return form_crud.update(db, db_obj=form, obj_in=form_in)

    @router.delete("/{form_id}")
    def delete_form(
        *,
        db: Session = Depends(get_db),
        form_id: int,
        current_user: User = Depends(deps.get_current_organizer),
    ) -> dict:
        deps.ensure_owner(form_crud.get(db, id=form_id), current_user, name)
        form_crud.remove(db, id=form_id)
        return {"message": f"{name} deleted successfully"}

    @router.post("/{form_id}/validate", response_model=List[schemas.FieldError])
    def validate_form_answers(
        *,
        db: Session = Depends(get_db),
        form_id: int,
        payload: schemas.FormSubmissionUpdate,
    ) -> Any:
        form = form_crud.get(db, id=form_id)
        if not form:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{name} not found")
        general_info = payload.general_info.dict(exclude_none=True) if payload.general_info else {}
        return validate_answers(form, general_info, payload.answers or {})

    return router


registration_router = build_form_router(crud.registration_form, "Registration form")
evaluation_router = build_form_router(crud.evaluation_form, "Evaluation form")
