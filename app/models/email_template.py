# File: app/models/email_template.py
from sqlalchemy import Column, String, Integer, ForeignKey, Text, JSON
from app.models.base import BaseModel

class EmailTemplate(BaseModel):
    __tablename__ = "email_templates"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    placeholders = Column(JSON, default=list)  # ["{{name}}", "{{email}}", ...]
    attachments = Column(JSON, default=list)  # [{"name": ..., "url": ...}]
