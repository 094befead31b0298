# File: app/api/v1/endpoints/committees.py
from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User

router = APIRouter()

# Committees

@router.get("/", response_model=List[schemas.Committee])
def list_committees(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    return crud.committee.get_multi_by_owner(db, user_id=current_user.id)

@router.post("/", response_model=schemas.Committee, status_code=status.HTTP_201_CREATED)
def create_committee(
    *,
    db: Session = Depends(get_db),
    committee_in: schemas.CommitteeCreate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    return crud.committee.create(db, obj_in=committee_in, user_id=current_user.id)

@router.put("/{committee_id}", response_model=schemas.Committee)
def update_committee(
    *,
    db: Session = Depends(get_db),
    committee_id: int,
    committee_in: schemas.CommitteeUpdate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    committee = deps.ensure_owner(crud.committee.get(db, id=committee_id), current_user, "Committee")
    return crud.committee.update(db, db_obj=committee, obj_in=committee_in)

@router.delete("/{committee_id}")
def delete_committee(
    *,
    db: Session = Depends(get_db),
    committee_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    deps.ensure_owner(crud.committee.get(db, id=committee_id), current_user, "Committee")
    crud.committee.remove(db, id=committee_id)
    return {"message": "Committee deleted successfully"}

# Committee members

@router.get("/members/", response_model=List[schemas.CommitteeMember])
def list_committee_members(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    return crud.committee_member.get_multi_by_owner(db, user_id=current_user.id, limit=1000)

@router.post("/members/", response_model=schemas.CommitteeMember, status_code=status.HTTP_201_CREATED)
def create_committee_member(
    *,
    db: Session = Depends(get_db),
    member_in: schemas.CommitteeMemberCreate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    return crud.committee_member.create(
        db, obj_in=member_in, user_id=current_user.id, email=member_in.email.lower()
    )

@router.put("/members/{member_id}", response_model=schemas.CommitteeMember)
def update_committee_member(
    *,
    db: Session = Depends(get_db),
    member_id: int,
    member_in: schemas.CommitteeMemberUpdate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    member = deps.ensure_owner(crud.committee_member.get(db, id=member_id), current_user, "Committee member")
    return crud.committee_member.update(db, db_obj=member, obj_in=member_in)

@router.delete("/members/{member_id}")
def delete_committee_member(
    *,
    db: Session = Depends(get_db),
    member_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    deps.ensure_owner(crud.committee_member.get(db, id=member_id), current_user, "Committee member")
    crud.committee_member.remove(db, id=member_id)
    return {"message": "Committee member deleted successfully"}

# Jury member profile of the signed-in reviewer

@router.get("/jury/me", response_model=schemas.JuryMember)
def get_my_jury_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    jury_member = crud.jury_member.get_by_user(db, user_id=current_user.id)
    if not jury_member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Jury profile not found")
    return jury_member

@router.put("/jury/me", response_model=schemas.JuryMember)
def upsert_my_jury_profile(
    *,
    db: Session = Depends(get_db),
    profile_in: schemas.JuryMemberUpsert,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return crud.jury_member.upsert_for_user(
        db, user_id=current_user.id, email=current_user.email, obj_in=profile_in
    )
