# File: app/models/participant_badge.py
from sqlalchemy import Column, Integer, String, ForeignKey
from app.models.base import BaseModel

class ParticipantBadge(BaseModel):
    __tablename__ = "participants_badge"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    form_submission_id = Column(Integer, ForeignKey("form_submissions.id", ondelete="CASCADE"), nullable=False, unique=True)
    badge_template_id = Column(Integer, ForeignKey("badge_templates.id"), nullable=True)
    badge_image_url = Column(String(500), nullable=False, index=True)
    badge_public_id = Column(String(255), nullable=True)  # Cloudinary public ID

    # Denormalized participant identity
    participant_name = Column(String(255), nullable=False)
    participant_email = Column(String(255), nullable=True)
    participant_phone = Column(String(50), nullable=True)
    participant_organization = Column(String(255), nullable=True)
    registration_type = Column(String(20), default="external")  # internal, external

    def __repr__(self):
        return f"<ParticipantBadge(id={self.id}, form_submission_id={self.form_submission_id})>"
