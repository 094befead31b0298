# File: app/models/badge_template.py
from sqlalchemy import Column, Integer, String, Text, ForeignKey, JSON
from app.models.base import BaseModel


class BadgeTemplate(BaseModel):
    __tablename__ = "badge_templates"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False, index=True)
    background_image = Column(Text, nullable=True)  # URL or data: URL
    background_image_type = Column(String(20), default="url")  # url, upload
    width = Column(Integer, nullable=False, default=600)
    height = Column(Integer, nullable=False, default=900)

    # [{"id", "type": text|field|qr, "content", "x", "y", "font_size", "font_weight", "color", "text_align"}]
    elements = Column(JSON, default=list)
