# File: app/schemas/form_submission.py
from pydantic import BaseModel, EmailStr
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime

Outcome = Literal["accepted", "reserved", "rejected"]
DispatchingStatusValue = Literal["pending", "dispatched", "in_review", "completed"]

class GeneralInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    organization: Optional[str] = None
    address: Optional[str] = None

class SubmissionStatusLabel(BaseModel):
    label: str
    tone: str

class FormSubmissionCreate(BaseModel):
    form_id: int
    event_id: int
    submitted_by: Optional[str] = None
    subscription_type: Literal["self", "entity"] = "self"
    entity_name: Optional[str] = None
    role: Literal["Organizer", "Participant"] = "Participant"
    general_info: GeneralInfo = GeneralInfo()
    answers: Dict[str, Any] = {}

class FormSubmissionUpdate(BaseModel):
    general_info: Optional[GeneralInfo] = None
    answers: Optional[Dict[str, Any]] = None

class DecisionUpdate(BaseModel):
    decision_status: Outcome
    decision_comment: Optional[str] = None
    accepted_event_id: Optional[int] = None

class ApprovalUpdate(BaseModel):
    approval_status: Outcome
    approval_comment: Optional[str] = None
    badge_template_id: Optional[int] = None

class DispatchingStatusUpdate(BaseModel):
    dispatching_status: Optional[DispatchingStatusValue] = None

class BulkDeleteRequest(BaseModel):
    submission_ids: List[int]

class FormSubmission(BaseModel):
    id: int
    form_id: int
    event_id: int
    event_title: Optional[str] = None
    user_id: int
    participant_user_id: Optional[int] = None
    submitted_by: Optional[str] = None
    subscription_type: str
    entity_name: Optional[str] = None
    role: str
    general_info: Dict[str, Any] = {}
    answers: Dict[str, Any] = {}
    decision_status: Optional[str] = None
    decision_comment: Optional[str] = None
    decision_date: Optional[datetime] = None
    decided_by: Optional[int] = None
    accepted_event_id: Optional[int] = None
    dispatching_status: Optional[str] = None
    approval_status: Optional[str] = None
    approval_comment: Optional[str] = None
    display_status: SubmissionStatusLabel
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class ApprovalResult(BaseModel):
    submission: FormSubmission
    badge_generated: bool = False
    badge_error: Optional[str] = None
