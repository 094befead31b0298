# File: app/models/form_answer.py
from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey
from app.models.base import BaseModel

class FormAnswer(BaseModel):
    """One row per answered field, mirroring FormSubmission.answers for reporting."""
    __tablename__ = "form_answers"

    submission_id = Column(Integer, ForeignKey("form_submissions.id", ondelete="CASCADE"), nullable=False, index=True)
    form_id = Column(Integer, ForeignKey("registration_forms.id", ondelete="CASCADE"), nullable=False, index=True)
    field_id = Column(String(100), nullable=False)
    field_label = Column(String(500), nullable=False)
    answer_value = Column(Text, nullable=True)
    answer_type = Column(String(20), nullable=False, default="text")  # text, number, date, file, array, object, boolean
    is_general_info = Column(Boolean, default=False)
    registration_type = Column(String(20), nullable=True)  # internal, external
