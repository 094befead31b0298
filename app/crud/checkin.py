from datetime import datetime, timezone
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.checkin import RegistrationCheckin, CheckinStatus, ALL_DAYS_LABEL
from app.schemas.checkin import CheckinSet


class CRUDCheckin(CRUDBase[RegistrationCheckin, CheckinSet, CheckinSet]):

    def get_for(
        self, db: Session, *, form_submission_id: int, event_day_id: Optional[str] = None
    ) -> Optional[RegistrationCheckin]:
        query = db.query(RegistrationCheckin).filter(RegistrationCheckin.form_submission_id == form_submission_id)
        if event_day_id is None:
            query = query.filter(RegistrationCheckin.event_day_id.is_(None))
        else:
            query = query.filter(RegistrationCheckin.event_day_id == event_day_id)
        return query.first()

    def get_by_submission(self, db: Session, *, form_submission_id: int) -> List[RegistrationCheckin]:
        return (
            db.query(RegistrationCheckin)
            .filter(RegistrationCheckin.form_submission_id == form_submission_id)
            .order_by(RegistrationCheckin.created_at.desc(), RegistrationCheckin.id.desc())
            .all()
        )

    def get_by_event(self, db: Session, *, event_id: int) -> List[RegistrationCheckin]:
        return (
            db.query(RegistrationCheckin)
            .filter(RegistrationCheckin.event_id == event_id)
            .order_by(RegistrationCheckin.created_at.desc(), RegistrationCheckin.id.desc())
            .all()
        )

    def get_status_map(self, db: Session, *, form_submission_ids: List[int]) -> Dict[int, List[RegistrationCheckin]]:
        """Submission id -> its check-ins, one per day plus the collective one."""
        if not form_submission_ids:
            return {}
        rows = (
            db.query(RegistrationCheckin)
            .filter(RegistrationCheckin.form_submission_id.in_(form_submission_ids))
            .order_by(RegistrationCheckin.created_at.desc(), RegistrationCheckin.id.desc())
            .all()
        )
        status_map: Dict[int, List[RegistrationCheckin]] = {}
        for row in rows:
            status_map.setdefault(row.form_submission_id, []).append(row)
        return status_map

    def set_status(
        self,
        db: Session,
        *,
        user_id: int,
        event_id: int,
        form_submission_id: int,
        checkin_status: str,
        checked_in_by: str,
        event_day_id: Optional[str] = None,
        event_day_label: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> RegistrationCheckin:
        db_obj = self.get_for(db, form_submission_id=form_submission_id, event_day_id=event_day_id)
        if db_obj is None:
            db_obj = RegistrationCheckin(
                user_id=user_id,
                event_id=event_id,
                form_submission_id=form_submission_id,
                event_day_id=event_day_id,
                event_day_label=(event_day_label or event_day_id) if event_day_id is not None else ALL_DAYS_LABEL,
            )
        db_obj.checkin_status = checkin_status
        if checkin_status == CheckinStatus.DONE.value:
            db_obj.checked_in_at = datetime.now(timezone.utc)
            db_obj.checked_in_by = checked_in_by
        else:
            db_obj.checked_in_at = None
            db_obj.checked_in_by = None
        if notes is not None:
            db_obj.notes = notes or None

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def toggle(
        self,
        db: Session,
        *,
        user_id: int,
        event_id: int,
        form_submission_id: int,
        checked_in_by: str,
        event_day_id: Optional[str] = None,
        event_day_label: Optional[str] = None,
    ) -> RegistrationCheckin:
        """done <-> undone; a first toggle checks the registration in."""
        existing = self.get_for(db, form_submission_id=form_submission_id, event_day_id=event_day_id)
        if existing is not None and existing.checkin_status == CheckinStatus.DONE.value:
            new_status = CheckinStatus.UNDONE.value
        else:
            new_status = CheckinStatus.DONE.value
        return self.set_status(
            db,
            user_id=user_id,
            event_id=event_id,
            form_submission_id=form_submission_id,
            checkin_status=new_status,
            checked_in_by=checked_in_by,
            event_day_id=event_day_id,
            event_day_label=event_day_label,
        )

checkin = CRUDCheckin(RegistrationCheckin)
