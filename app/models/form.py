# File: app/models/form.py
from sqlalchemy import Column, String, Text, Integer, ForeignKey, JSON
from app.models.base import BaseModel


def default_general_info():
    return {
        "collect_name": True,
        "collect_email": True,
        "collect_phone": False,
        "collect_organization": False,
        "collect_address": False,
    }


class FormDefinitionMixin:
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # sections -> subsections -> fields, stored as one JSON document
    sections = Column(JSON, default=list)
    fields = Column(JSON, default=list)  # Legacy fields outside any section
    general_info = Column(JSON, default=default_general_info)
    actions = Column(JSON, default=dict)  # send_copy_of_answers, send_confirmation_email


class RegistrationForm(FormDefinitionMixin, BaseModel):
    __tablename__ = "registration_forms"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)


class EvaluationForm(FormDefinitionMixin, BaseModel):
    __tablename__ = "evaluation_forms"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
