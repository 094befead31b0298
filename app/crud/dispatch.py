import json
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.dispatch import DispatchSubmission
from app.schemas.dispatch import DispatchSave


def decode_dispatching(raw: Any) -> Dict[int, List[int]]:
    """Submission id -> committee member ids. Accepts a dict or its JSON text."""
    if raw is None or raw == "":
        return {}
    if isinstance(raw, str):
        raw = json.loads(raw)
    result: Dict[int, List[int]] = {}
    for submission_id, member_ids in raw.items():
        if not isinstance(member_ids, list):
            member_ids = [member_ids]
        result[int(submission_id)] = [int(member_id) for member_id in member_ids]
    return result


def encode_dispatching(dispatching: Dict[int, List[int]]) -> Dict[str, List[int]]:
    return {str(submission_id): list(member_ids) for submission_id, member_ids in dispatching.items()}


class CRUDDispatch(CRUDBase[DispatchSubmission, DispatchSave, DispatchSave]):

    def get_for(self, db: Session, *, user_id: int, event_id: int, form_id: int) -> Optional[DispatchSubmission]:
        return (
            db.query(DispatchSubmission)
            .filter(
                DispatchSubmission.user_id == user_id,
                DispatchSubmission.event_id == event_id,
                DispatchSubmission.form_id == form_id,
            )
            .first()
        )

    def save(
        self,
        db: Session,
        *,
        user_id: int,
        event_id: int,
        form_id: int,
        dispatching: Dict[int, List[int]],
        deadline: Optional[datetime] = None,
    ) -> DispatchSubmission:
        if not user_id:
            raise ValueError("User ID is required")
        if not event_id:
            raise ValueError("Event ID is required")
        if not form_id:
            raise ValueError("Form ID is required")

        db_obj = self.get_for(db, user_id=user_id, event_id=event_id, form_id=form_id)
        if db_obj is None:
            db_obj = DispatchSubmission(user_id=user_id, event_id=event_id, form_id=form_id)
        db_obj.dispatching = encode_dispatching(dispatching)
        db_obj.deadline = deadline
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_user(self, db: Session, *, user_id: int) -> List[DispatchSubmission]:
        return (
            db.query(DispatchSubmission)
            .filter(DispatchSubmission.user_id == user_id)
            .order_by(DispatchSubmission.updated_at.desc(), DispatchSubmission.id.desc())
            .all()
        )

    def get_all_recent_first(self, db: Session) -> List[DispatchSubmission]:
        return (
            db.query(DispatchSubmission)
            .order_by(DispatchSubmission.updated_at.desc(), DispatchSubmission.id.desc())
            .all()
        )

    def get_by_event(self, db: Session, *, event_id: int) -> List[DispatchSubmission]:
        return db.query(DispatchSubmission).filter(DispatchSubmission.event_id == event_id).all()

dispatch = CRUDDispatch(DispatchSubmission)
