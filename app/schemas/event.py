# File: app/schemas/event.py
from pydantic import BaseModel
from typing import List, Literal, Optional
from datetime import datetime

PublishStatus = Literal["Draft", "Published", "Closed"]

class EventBase(BaseModel):
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    publish_status: PublishStatus = "Draft"
    keywords: List[str] = []
    registration_form_ids: List[int] = []
    submission_form_ids: List[int] = []
    evaluation_form_ids: List[int] = []
    committee_ids: List[int] = []

class EventCreate(EventBase):
    pass

class EventUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    publish_status: Optional[PublishStatus] = None
    keywords: Optional[List[str]] = None
    registration_form_ids: Optional[List[int]] = None
    submission_form_ids: Optional[List[int]] = None
    evaluation_form_ids: Optional[List[int]] = None
    committee_ids: Optional[List[int]] = None

class Event(EventBase):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
