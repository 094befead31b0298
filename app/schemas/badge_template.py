from typing import Optional, List, Literal
from pydantic import BaseModel
from datetime import datetime


class BadgeElement(BaseModel):
    id: str
    type: Literal["text", "field", "qr"]
    content: str = ""
    x: float = 50  # percent of width
    y: float = 50  # percent of height
    font_size: int = 24  # QR size in pixels for qr elements
    font_family: Optional[str] = None
    font_weight: Literal["normal", "bold", "semibold"] = "normal"
    color: str = "#000000"
    text_align: Literal["left", "center", "right"] = "center"


class BadgeTemplateBase(BaseModel):
    title: str
    background_image: Optional[str] = None
    background_image_type: Literal["url", "upload"] = "url"
    width: int = 600
    height: int = 900
    elements: List[BadgeElement] = []


class BadgeTemplateCreate(BadgeTemplateBase):
    pass


class BadgeTemplateUpdate(BaseModel):
    title: Optional[str] = None
    background_image: Optional[str] = None
    background_image_type: Optional[Literal["url", "upload"]] = None
    width: Optional[int] = None
    height: Optional[int] = None
    elements: Optional[List[BadgeElement]] = None


class BadgeTemplate(BadgeTemplateBase):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BadgeGenerateRequest(BaseModel):
    form_submission_id: int
    badge_template_id: int


class BadgeLookupRequest(BaseModel):
    form_submission_ids: List[int]


class ParticipantBadge(BaseModel):
    id: int
    user_id: int
    event_id: int
    form_submission_id: int
    badge_template_id: Optional[int] = None
    badge_image_url: str
    participant_name: str
    participant_email: Optional[str] = None
    participant_phone: Optional[str] = None
    participant_organization: Optional[str] = None
    registration_type: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
