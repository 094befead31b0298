# File: app/schemas/email.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional
from datetime import datetime

class EmailAttachment(BaseModel):
    name: str
    url: str

class EmailTemplateBase(BaseModel):
    title: str
    subject: str
    body: str
    placeholders: List[str] = []
    attachments: List[EmailAttachment] = []

    @field_validator("title", "subject", "body")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value

class EmailTemplateCreate(EmailTemplateBase):
    pass

class EmailTemplateUpdate(BaseModel):
    title: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    placeholders: Optional[List[str]] = None
    attachments: Optional[List[EmailAttachment]] = None

class EmailTemplate(EmailTemplateBase):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class EmailRecipient(BaseModel):
    """Recipient plus any extra keys usable as {{placeholders}}."""
    email: str
    name: Optional[str] = None
    approval_status: Optional[str] = Field(default=None, alias="approvalStatus")
    event_title: Optional[str] = Field(default=None, alias="eventTitle")
    comment: Optional[str] = None

    class Config:
        extra = "allow"
        populate_by_name = True

class BulkEmailRequest(BaseModel):
    template_id: Optional[int] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    recipients: List[EmailRecipient]
    attachments: List[EmailAttachment] = []

class RecipientResult(BaseModel):
    email: str
    name: Optional[str] = None
    status: Literal["sent", "failed"]
    error: Optional[str] = None

class BulkEmailResult(BaseModel):
    total: int
    sent: int
    failed: int
    results: List[RecipientResult]

class SendEmailRequest(BaseModel):
    to: Optional[str] = None
    subject: Optional[str] = None
    html: Optional[str] = None
    recipient_name: Optional[str] = Field(default=None, alias="recipientName")
    attachments: List[EmailAttachment] = []

    class Config:
        populate_by_name = True
