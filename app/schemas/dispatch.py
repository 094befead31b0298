# File: app/schemas/dispatch.py
from pydantic import BaseModel
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime

class DispatchSave(BaseModel):
    event_id: int
    form_id: int
    dispatching: Dict[int, List[int]] = {}
    deadline: Optional[datetime] = None

class DispatchSubmission(BaseModel):
    id: int
    user_id: int
    event_id: int
    form_id: int
    dispatching: Dict[int, List[int]] = {}
    deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class DispatchedItem(BaseModel):
    submission_id: int
    submission_type: Literal["submission", "evaluation"]
    event_id: int
    event_name: str
    form_id: int
    form_title: str
    submission: Dict[str, Any]
    dispatch_id: int
    deadline: Optional[datetime] = None

class SubmissionReviewProgress(BaseModel):
    submission_id: int
    assigned: int
    drafts: int
    completed: int
    dispatching_status: Optional[str] = None
