# File: app/models/dispatch.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, JSON, UniqueConstraint
from app.models.base import BaseModel

class DispatchSubmission(BaseModel):
    __tablename__ = "dispatch_submissions"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", "form_id", name="uq_dispatch_user_event_form"),
    )

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    form_id = Column(Integer, nullable=False)  # registration or evaluation form

    # {"<submission id>": [committee member ids]}
    dispatching = Column(JSON, default=dict)
    deadline = Column(DateTime(timezone=True), nullable=True)
