from pydantic import BaseModel
from typing import Any, Dict, Literal, Optional
from datetime import datetime

ReviewStatusValue = Literal["draft", "completed"]

class ReviewSave(BaseModel):
    participant_id: int
    event_id: int
    form_id: int
    submission_id: int
    submission_type: Literal["submission", "evaluation"] = "submission"
    status: ReviewStatusValue = "draft"
    answers: Optional[Dict[str, Any]] = None

class ParticipantReview(BaseModel):
    id: int
    participant_id: int
    user_id: Optional[int] = None
    event_id: int
    form_id: int
    submission_id: int
    submission_type: str
    status: ReviewStatusValue
    answers: Dict[str, Any] = {}
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
