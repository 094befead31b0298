# File: app/models/review.py
from sqlalchemy import Column, String, Integer, ForeignKey, JSON, UniqueConstraint
from app.models.base import BaseModel
import enum

class ReviewStatus(enum.Enum):
    DRAFT = "draft"
    COMPLETED = "completed"

class ParticipantReview(BaseModel):
    __tablename__ = "participant_reviews"
    __table_args__ = (
        UniqueConstraint("participant_id", "submission_id", "form_id", name="uq_review_participant_submission_form"),
    )

    participant_id = Column(Integer, ForeignKey("committee_members.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    form_id = Column(Integer, nullable=False)  # Evaluation form used for the review
    submission_id = Column(Integer, nullable=False, index=True)
    submission_type = Column(String(20), default="submission")  # submission, evaluation
    status = Column(String(20), nullable=False, default=ReviewStatus.DRAFT.value)
    answers = Column(JSON, default=dict)
