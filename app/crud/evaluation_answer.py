from typing import List
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.evaluation_answer import EvaluationAnswer
from app.schemas.evaluation_answer import EvaluationAnswerCreate

class CRUDEvaluationAnswer(CRUDBase[EvaluationAnswer, EvaluationAnswerCreate, EvaluationAnswerCreate]):

    def get_by_form(self, db: Session, *, evaluation_form_id: int) -> List[EvaluationAnswer]:
        return (
            db.query(EvaluationAnswer)
            .filter(EvaluationAnswer.evaluation_form_id == evaluation_form_id)
            .order_by(EvaluationAnswer.created_at.desc())
            .all()
        )

    def get_by_user(self, db: Session, *, user_id: int) -> List[EvaluationAnswer]:
        return (
            db.query(EvaluationAnswer)
            .filter(EvaluationAnswer.user_id == user_id)
            .order_by(EvaluationAnswer.created_at.desc())
            .all()
        )

    def get_many(self, db: Session, *, ids: List[int]) -> List[EvaluationAnswer]:
        if not ids:
            return []
        return db.query(EvaluationAnswer).filter(EvaluationAnswer.id.in_(ids)).all()

    def get_by_user_and_form(self, db: Session, *, user_id: int, evaluation_form_id: int) -> List[EvaluationAnswer]:
        return (
            db.query(EvaluationAnswer)
            .filter(
                EvaluationAnswer.user_id == user_id,
                EvaluationAnswer.evaluation_form_id == evaluation_form_id,
            )
            .order_by(EvaluationAnswer.created_at.desc())
            .all()
        )

evaluation_answer = CRUDEvaluationAnswer(EvaluationAnswer)
