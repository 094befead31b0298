# File: app/models/checkin.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime
from app.models.base import BaseModel
import enum

class CheckinStatus(enum.Enum):
    DONE = "done"
    UNDONE = "undone"

ALL_DAYS_LABEL = "All Days"

class RegistrationCheckin(BaseModel):
    """Attendance of an accepted registration, per event day or for the whole event."""
    __tablename__ = "registration_checkins"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    form_submission_id = Column(Integer, ForeignKey("form_submissions.id", ondelete="CASCADE"), nullable=False, index=True)
    checkin_status = Column(String(20), nullable=False, default=CheckinStatus.UNDONE.value)
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    checked_in_by = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    # NULL event_day_id is the collective check-in
    event_day_id = Column(String(100), nullable=True)
    event_day_label = Column(String(255), nullable=True)

    def __repr__(self):
        return f"<RegistrationCheckin(id={self.id}, form_submission_id={self.form_submission_id}, status={self.checkin_status})>"
