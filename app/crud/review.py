from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.review import ParticipantReview, ReviewStatus
from app.schemas.review import ReviewSave


class ReviewStatusConflict(Exception):
    """Raised when a completed review would be moved back to draft."""


class CRUDReview(CRUDBase[ParticipantReview, ReviewSave, ReviewSave]):

    def get_for(
        self, db: Session, *, participant_id: int, submission_id: int, form_id: int
    ) -> Optional[ParticipantReview]:
        return (
            db.query(ParticipantReview)
            .filter(
                ParticipantReview.participant_id == participant_id,
                ParticipantReview.submission_id == submission_id,
                ParticipantReview.form_id == form_id,
            )
            .first()
        )

    def save(self, db: Session, *, obj_in: ReviewSave, user_id: Optional[int] = None) -> ParticipantReview:
        db_obj = self.get_for(
            db,
            participant_id=obj_in.participant_id,
            submission_id=obj_in.submission_id,
            form_id=obj_in.form_id,
        )
        status = obj_in.status or ReviewStatus.DRAFT.value

        if db_obj is None:
            db_obj = ParticipantReview(
                participant_id=obj_in.participant_id,
                user_id=user_id,
                event_id=obj_in.event_id,
                form_id=obj_in.form_id,
                submission_id=obj_in.submission_id,
                submission_type=obj_in.submission_type,
                status=status,
                answers=obj_in.answers or {},
            )
        else:
            if db_obj.status == ReviewStatus.COMPLETED.value and status == ReviewStatus.DRAFT.value:
                raise ReviewStatusConflict("A completed review cannot be moved back to draft")
            db_obj.answers = obj_in.answers or {}
            db_obj.status = status

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_participant(self, db: Session, *, participant_ids: List[int]) -> List[ParticipantReview]:
        if not participant_ids:
            return []
        return (
            db.query(ParticipantReview)
            .filter(ParticipantReview.participant_id.in_(participant_ids))
            .order_by(ParticipantReview.updated_at.desc())
            .all()
        )

    def get_by_submission(
        self, db: Session, *, submission_id: int, form_id: Optional[int] = None
    ) -> List[ParticipantReview]:
        query = db.query(ParticipantReview).filter(ParticipantReview.submission_id == submission_id)
        if form_id is not None:
            query = query.filter(ParticipantReview.form_id == form_id)
        return query.order_by(ParticipantReview.id.asc()).all()

    def get_by_event(self, db: Session, *, event_id: int) -> List[ParticipantReview]:
        return (
            db.query(ParticipantReview)
            .filter(ParticipantReview.event_id == event_id)
            .order_by(ParticipantReview.id.asc())
            .all()
        )

review = CRUDReview(ParticipantReview)
