# File: app/models/event.py
from sqlalchemy import Column, String, Text, Integer, ForeignKey, JSON
from app.models.base import BaseModel

class Event(BaseModel):
    __tablename__ = "events"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    location = Column(String(255))
    publish_status = Column(String(20), default="Draft")  # Draft, Published, Closed
    keywords = Column(JSON, default=list)

    # Forms and committees attached to this event
    registration_form_ids = Column(JSON, default=list)
    submission_form_ids = Column(JSON, default=list)
    evaluation_form_ids = Column(JSON, default=list)
    committee_ids = Column(JSON, default=list)
