# File: app/models/committee.py
from sqlalchemy import Column, String, Integer, ForeignKey, Boolean, Text, JSON
from app.models.base import BaseModel

class Committee(BaseModel):
    __tablename__ = "committees"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # [{"id": "...", "name": "...", "member_ids": [1, 2]}]
    fields_of_intervention = Column(JSON, default=list)

class CommitteeMember(BaseModel):
    """Reviewer directory entry owned by an organizer; matched to jury accounts by email."""
    __tablename__ = "committee_members"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Identity
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    title = Column(String(50), nullable=True)
    gender = Column(String(20), nullable=True)
    nationality = Column(String(100), nullable=True)

    # Contact
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    preferred_language = Column(String(10), nullable=True)

    # Academic profile
    affiliation = Column(JSON, default=dict)
    research_domains = Column(JSON, default=list)
    identifiers = Column(JSON, default=dict)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in [self.title, self.first_name, self.last_name] if part)

class JuryMember(BaseModel):
    """Profile attached to a reviewer's own user account."""
    __tablename__ = "jury_members"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    title = Column(String(50), nullable=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(50), nullable=True)
    affiliation = Column(JSON, default=dict)
    research_domains = Column(JSON, default=list)
    profile_completed = Column(Boolean, default=False)
