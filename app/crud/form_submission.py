from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.checkin import RegistrationCheckin
from app.models.form_answer import FormAnswer
from app.models.form_submission import FormSubmission
from app.schemas.form_submission import FormSubmissionCreate, FormSubmissionUpdate
from app.services.form_answers import build_answer_rows

class CRUDFormSubmission(CRUDBase[FormSubmission, FormSubmissionCreate, FormSubmissionUpdate]):

    def create_with_answers(
        self,
        db: Session,
        *,
        obj_in: FormSubmissionCreate,
        form,
        owner_id: int,
        event_title: Optional[str] = None,
        participant_user_id: Optional[int] = None,
    ) -> FormSubmission:
        general_info = obj_in.general_info.dict(exclude_none=True)
        db_obj = FormSubmission(
            form_id=obj_in.form_id,
            event_id=obj_in.event_id,
            event_title=event_title,
            user_id=owner_id,
            participant_user_id=participant_user_id,
            submitted_by=obj_in.submitted_by or general_info.get("email"),
            subscription_type=obj_in.subscription_type,
            entity_name=obj_in.entity_name,
            role=obj_in.role,
            general_info=general_info,
            answers=obj_in.answers,
        )
        db.add(db_obj)
        db.flush()

        for row in build_answer_rows(form, obj_in.answers, participant_user_id):
            db.add(FormAnswer(submission_id=db_obj.id, form_id=obj_in.form_id, **row))

        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_event(self, db: Session, *, event_id: int) -> List[FormSubmission]:
        return (
            db.query(FormSubmission)
            .filter(or_(FormSubmission.event_id == event_id, FormSubmission.accepted_event_id == event_id))
            .order_by(FormSubmission.created_at.desc())
            .all()
        )

    def get_by_form(self, db: Session, *, form_id: int) -> List[FormSubmission]:
        return (
            db.query(FormSubmission)
            .filter(FormSubmission.form_id == form_id)
            .order_by(FormSubmission.created_at.asc(), FormSubmission.id.asc())
            .all()
        )

    def get_by_submitter(
        self, db: Session, *, email: Optional[str] = None, participant_user_id: Optional[int] = None
    ) -> List[FormSubmission]:
        conditions = []
        if email:
            conditions.append(FormSubmission.submitted_by == email)
        if participant_user_id:
            conditions.append(FormSubmission.participant_user_id == participant_user_id)
        if not conditions:
            return []
        return (
            db.query(FormSubmission)
            .filter(or_(*conditions))
            .order_by(FormSubmission.created_at.desc())
            .all()
        )

    def get_many(self, db: Session, *, ids: List[int]) -> List[FormSubmission]:
        if not ids:
            return []
        return db.query(FormSubmission).filter(FormSubmission.id.in_(ids)).all()

    def set_decision(
        self,
        db: Session,
        *,
        db_obj: FormSubmission,
        decision_status: str,
        decided_by: int,
        decision_comment: Optional[str] = None,
        accepted_event_id: Optional[int] = None,
    ) -> FormSubmission:
        db_obj.decision_status = decision_status
        db_obj.decision_comment = decision_comment
        db_obj.decision_date = datetime.now(timezone.utc)
        db_obj.decided_by = decided_by
        if decision_status in ("accepted", "reserved"):
            db_obj.accepted_event_id = accepted_event_id or db_obj.event_id
        else:
            db_obj.accepted_event_id = None
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_approval(
        self, db: Session, *, db_obj: FormSubmission, approval_status: str, approval_comment: Optional[str] = None
    ) -> FormSubmission:
        db_obj.approval_status = approval_status
        db_obj.approval_comment = approval_comment
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_dispatching_status(
        self, db: Session, *, db_obj: FormSubmission, dispatching_status: Optional[str]
    ) -> FormSubmission:
        db_obj.dispatching_status = dispatching_status
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def remove_many(self, db: Session, *, ids: List[int]) -> int:
        if not ids:
            return 0
        db.query(FormAnswer).filter(FormAnswer.submission_id.in_(ids)).delete(synchronize_session=False)
        db.query(RegistrationCheckin).filter(
            RegistrationCheckin.form_submission_id.in_(ids)
        ).delete(synchronize_session=False)
        deleted = (
            db.query(FormSubmission)
            .filter(FormSubmission.id.in_(ids))
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted

form_submission = CRUDFormSubmission(FormSubmission)
