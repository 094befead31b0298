from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.badge_template import BadgeTemplate
from app.models.participant_badge import ParticipantBadge
from app.schemas.badge_template import BadgeTemplateCreate, BadgeTemplateUpdate


class CRUDBadgeTemplate(CRUDBase[BadgeTemplate, BadgeTemplateCreate, BadgeTemplateUpdate]):
    def get_by_title(self, db: Session, *, user_id: int, title: str) -> Optional[BadgeTemplate]:
        return (
            db.query(BadgeTemplate)
            .filter(BadgeTemplate.user_id == user_id, BadgeTemplate.title == title)
            .first()
        )


class CRUDParticipantBadge:
    def get(self, db: Session, *, id: int) -> Optional[ParticipantBadge]:
        return db.get(ParticipantBadge, id)

    def get_by_submission(self, db: Session, *, form_submission_id: int) -> Optional[ParticipantBadge]:
        return (
            db.query(ParticipantBadge)
            .filter(ParticipantBadge.form_submission_id == form_submission_id)
            .first()
        )

    def get_by_event(self, db: Session, *, event_id: int) -> List[ParticipantBadge]:
        return (
            db.query(ParticipantBadge)
            .filter(ParticipantBadge.event_id == event_id)
            .order_by(ParticipantBadge.created_at.desc())
            .all()
        )

    def get_by_submissions(self, db: Session, *, form_submission_ids: List[int]) -> List[ParticipantBadge]:
        if not form_submission_ids:
            return []
        return (
            db.query(ParticipantBadge)
            .filter(ParticipantBadge.form_submission_id.in_(form_submission_ids))
            .all()
        )

    def get_by_image_url(self, db: Session, *, badge_image_url: str) -> Optional[ParticipantBadge]:
        return (
            db.query(ParticipantBadge)
            .filter(ParticipantBadge.badge_image_url == badge_image_url)
            .first()
        )

    def upsert(self, db: Session, *, form_submission_id: int, **values) -> ParticipantBadge:
        db_obj = self.get_by_submission(db, form_submission_id=form_submission_id)
        if db_obj is None:
            db_obj = ParticipantBadge(form_submission_id=form_submission_id)
        for field, value in values.items():
            setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove(self, db: Session, *, id: int) -> Optional[ParticipantBadge]:
        obj = db.get(ParticipantBadge, id)
        if obj:
            db.delete(obj)
            db.commit()
        return obj


badge_template = CRUDBadgeTemplate(BadgeTemplate)
participant_badge = CRUDParticipantBadge()
