# File: app/models/evaluation_answer.py
from sqlalchemy import Column, String, Integer, ForeignKey, JSON
from app.models.base import BaseModel

class EvaluationAnswer(BaseModel):
    __tablename__ = "evaluation_answers"

    evaluation_form_id = Column(Integer, ForeignKey("evaluation_forms.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    submitted_by = Column(String(255), nullable=True)
    general_info = Column(JSON, nullable=True)
    answers = Column(JSON, default=dict)
