from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.committee import Committee, CommitteeMember, JuryMember
from app.schemas.committee import (
    CommitteeCreate, CommitteeUpdate, CommitteeMemberCreate, CommitteeMemberUpdate, JuryMemberUpsert
)

class CRUDCommittee(CRUDBase[Committee, CommitteeCreate, CommitteeUpdate]):
    pass

class CRUDCommitteeMember(CRUDBase[CommitteeMember, CommitteeMemberCreate, CommitteeMemberUpdate]):

    def get_by_email(self, db: Session, *, email: str) -> List[CommitteeMember]:
        return (
            db.query(CommitteeMember)
            .filter(func.lower(CommitteeMember.email) == email.strip().lower())
            .all()
        )

    def get_ids_by_email(self, db: Session, *, email: str) -> List[int]:
        return [member.id for member in self.get_by_email(db, email=email)]

    def get_many(self, db: Session, *, ids: List[int]) -> List[CommitteeMember]:
        if not ids:
            return []
        return db.query(CommitteeMember).filter(CommitteeMember.id.in_(ids)).all()

class CRUDJuryMember(CRUDBase[JuryMember, JuryMemberUpsert, JuryMemberUpsert]):

    def get_by_user(self, db: Session, *, user_id: int) -> Optional[JuryMember]:
        return db.query(JuryMember).filter(JuryMember.user_id == user_id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[JuryMember]:
        return db.query(JuryMember).filter(func.lower(JuryMember.email) == email.lower()).first()

    def upsert_for_user(self, db: Session, *, user_id: int, email: str, obj_in: JuryMemberUpsert) -> JuryMember:
        data = obj_in.dict()
        db_obj = self.get_by_user(db, user_id=user_id)
        if db_obj is None:
            db_obj = JuryMember(user_id=user_id, email=email.lower(), **data)
        else:
            for field, value in data.items():
                setattr(db_obj, field, value)
        db_obj.profile_completed = bool(db_obj.first_name and db_obj.last_name)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

committee = CRUDCommittee(Committee)
committee_member = CRUDCommitteeMember(CommitteeMember)
jury_member = CRUDJuryMember(JuryMember)
