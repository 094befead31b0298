# File: app/schemas/committee.py
from pydantic import BaseModel, EmailStr
from typing import Any, Dict, List, Optional
from datetime import datetime

class FieldOfIntervention(BaseModel):
    id: str
    name: str
    member_ids: List[int] = []

class CommitteeCreate(BaseModel):
    name: str
    description: Optional[str] = None
    fields_of_intervention: List[FieldOfIntervention] = []

class CommitteeUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    fields_of_intervention: Optional[List[FieldOfIntervention]] = None

class Committee(CommitteeCreate):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CommitteeMemberCreate(BaseModel):
    first_name: str
    last_name: str
    email: EmailStr
    title: Optional[str] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    preferred_language: Optional[str] = None
    affiliation: Dict[str, Any] = {}
    research_domains: List[str] = []
    identifiers: Dict[str, Any] = {}

class CommitteeMemberUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[EmailStr] = None
    title: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    preferred_language: Optional[str] = None
    affiliation: Optional[Dict[str, Any]] = None
    research_domains: Optional[List[str]] = None
    identifiers: Optional[Dict[str, Any]] = None

class CommitteeMember(CommitteeMemberCreate):
    id: int
    user_id: int
    email: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class JuryMemberUpsert(BaseModel):
    first_name: str
    last_name: str
    title: Optional[str] = None
    phone: Optional[str] = None
    affiliation: Dict[str, Any] = {}
    research_domains: List[str] = []

class JuryMember(JuryMemberUpsert):
    id: int
    user_id: int
    email: str
    profile_completed: bool

    class Config:
        from_attributes = True
