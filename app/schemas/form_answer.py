from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class FormAnswer(BaseModel):
    id: int
    submission_id: int
    form_id: int
    field_id: str
    field_label: str
    answer_value: Optional[str] = None
    answer_type: str
    is_general_info: bool
    registration_type: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
