from pydantic import BaseModel
from typing import List, Literal, Optional
from datetime import datetime

CheckinStatusValue = Literal["done", "undone"]

class CheckinToggle(BaseModel):
    event_id: int
    form_submission_id: int
    event_day_id: Optional[str] = None
    event_day_label: Optional[str] = None

class CheckinBulkToggle(BaseModel):
    event_id: int
    form_submission_ids: List[int]
    event_day_id: Optional[str] = None
    event_day_label: Optional[str] = None

class CheckinSet(CheckinToggle):
    checkin_status: CheckinStatusValue
    notes: Optional[str] = None

class RegistrationCheckin(BaseModel):
    id: int
    user_id: int
    event_id: int
    form_submission_id: int
    checkin_status: CheckinStatusValue
    checked_in_at: Optional[datetime] = None
    checked_in_by: Optional[str] = None
    notes: Optional[str] = None
    event_day_id: Optional[str] = None
    event_day_label: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class BulkCheckinResult(BaseModel):
    checkins: List[RegistrationCheckin]
    failed: List[int] = []
