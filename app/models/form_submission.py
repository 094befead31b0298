# File: app/models/form_submission.py
from sqlalchemy import Column, String, Text, Integer, ForeignKey, DateTime, JSON
from app.models.base import BaseModel
from app.services.submission_status import status_for_submission
import enum

class DecisionStatus(enum.Enum):
    ACCEPTED = "accepted"
    RESERVED = "reserved"
    REJECTED = "rejected"

class ApprovalStatus(enum.Enum):
    ACCEPTED = "accepted"
    RESERVED = "reserved"
    REJECTED = "rejected"

class DispatchingStatus(enum.Enum):
    PENDING = "pending"
    DISPATCHED = "dispatched"
    IN_REVIEW = "in_review"
    COMPLETED = "completed"

class FormSubmission(BaseModel):
    __tablename__ = "form_submissions"

    form_id = Column(Integer, ForeignKey("registration_forms.id", ondelete="CASCADE"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    event_title = Column(String(255), nullable=True)

    # Organizer owning the form, and the participant account (if any) that submitted it
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    participant_user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    submitted_by = Column(String(255), nullable=True)

    subscription_type = Column(String(20), default="self")  # self, entity
    entity_name = Column(String(255), nullable=True)
    role = Column(String(20), default="Participant")  # Organizer, Participant

    general_info = Column(JSON, default=dict)
    answers = Column(JSON, default=dict)

    # Acceptance decision
    decision_status = Column(String(20), nullable=True)
    decision_comment = Column(Text, nullable=True)
    decision_date = Column(DateTime(timezone=True), nullable=True)
    decided_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    accepted_event_id = Column(Integer, ForeignKey("events.id"), nullable=True, index=True)

    # Review dispatching
    dispatching_status = Column(String(20), nullable=True)

    # Final approval
    approval_status = Column(String(20), nullable=True)
    approval_comment = Column(Text, nullable=True)

    @property
    def display_status(self):
        return status_for_submission(self)
