from typing import List
from sqlalchemy.orm import Session
from app.models.form_answer import FormAnswer

class CRUDFormAnswer:

    def get_by_submission(self, db: Session, *, submission_id: int) -> List[FormAnswer]:
        return (
            db.query(FormAnswer)
            .filter(FormAnswer.submission_id == submission_id)
            .order_by(FormAnswer.created_at.asc(), FormAnswer.id.asc())
            .all()
        )

form_answer = CRUDFormAnswer()
