from pydantic import BaseModel
from typing import Any, Dict, Optional
from datetime import datetime

class EvaluationAnswerCreate(BaseModel):
    evaluation_form_id: int
    submitted_by: Optional[str] = None
    general_info: Optional[Dict[str, Any]] = None
    answers: Dict[str, Any] = {}

class EvaluationAnswer(EvaluationAnswerCreate):
    id: int
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
