from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User
from app.services.form_schema import validate_answers
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/", response_model=schemas.EvaluationAnswer, status_code=status.HTTP_201_CREATED)
def save_evaluation_answer(
    *,
    db: Session = Depends(get_db),
    answer_in: schemas.EvaluationAnswerCreate,
    current_user: Optional[User] = Depends(deps.get_optional_user),
) -> Any:
    form = crud.evaluation_form.get(db, id=answer_in.evaluation_form_id)
    if not form:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Evaluation form not found")
    errors = validate_answers(form, answer_in.general_info or {}, answer_in.answers)
    if errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=errors)

    answer = crud.evaluation_answer.create(
        db,
        obj_in=answer_in,
        user_id=current_user.id if current_user else None,
    )
    logger.info(f"Evaluation answer {answer.id} saved for form {form.id}")
    return answer

@router.get("/form/{form_id}", response_model=List[schemas.EvaluationAnswer])
def list_form_answers(
    *,
    db: Session = Depends(get_db),
    form_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    deps.ensure_owner(crud.evaluation_form.get(db, id=form_id), current_user, "Evaluation form")
    return crud.evaluation_answer.get_by_form(db, evaluation_form_id=form_id)

@router.get("/me", response_model=List[schemas.EvaluationAnswer])
def list_my_answers(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
    form_id: Optional[int] = None,
) -> Any:
    if form_id is not None:
        return crud.evaluation_answer.get_by_user_and_form(db, user_id=current_user.id, evaluation_form_id=form_id)
    return crud.evaluation_answer.get_by_user(db, user_id=current_user.id)

@router.delete("/{answer_id}")
def delete_evaluation_answer(
    *,
    db: Session = Depends(get_db),
    answer_id: int,
    current_user: User = Depends(deps.get_current_active_user),
) -> dict:
    answer = crud.evaluation_answer.get(db, id=answer_id)
    if not answer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Evaluation answer not found")
    form = crud.evaluation_form.get(db, id=answer.evaluation_form_id)
    if answer.user_id != current_user.id and (form is None or form.user_id != current_user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
    crud.evaluation_answer.remove(db, id=answer_id)
    return {"message": "Evaluation answer deleted successfully"}
