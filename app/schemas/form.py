# File: app/schemas/form.py
from pydantic import BaseModel
from typing import List, Literal, Optional
from datetime import datetime

FieldType = Literal[
    "text", "email", "phone", "number", "textarea", "select",
    "checkbox", "radio", "date", "file", "url",
]

class FieldValidation(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None

class FormField(BaseModel):
    id: str
    type: FieldType
    label: str
    placeholder: Optional[str] = None
    required: bool = False
    multiple: bool = False
    use_as_filter: bool = False
    has_sub_fields: bool = False
    sub_fields: Optional[List["FormField"]] = None
    options: Optional[List[str]] = None
    validation: Optional[FieldValidation] = None
    help_text: Optional[str] = None
    order: int = 0

class FormSubsection(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    order: int = 0
    fields: List[FormField] = []

class FormSection(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    order: int = 0
    subsections: List[FormSubsection] = []
    fields: List[FormField] = []

class GeneralInfoSettings(BaseModel):
    collect_name: bool = True
    collect_email: bool = True
    collect_phone: bool = False
    collect_organization: bool = False
    collect_address: bool = False

class FormActions(BaseModel):
    send_copy_of_answers: bool = False
    send_confirmation_email: bool = False

class FormBase(BaseModel):
    title: str
    description: Optional[str] = None
    sections: List[FormSection] = []
    fields: List[FormField] = []
    general_info: GeneralInfoSettings = GeneralInfoSettings()
    actions: FormActions = FormActions()

class FormCreate(FormBase):
    pass

class FormUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    sections: Optional[List[FormSection]] = None
    fields: Optional[List[FormField]] = None
    general_info: Optional[GeneralInfoSettings] = None
    actions: Optional[FormActions] = None

class Form(FormBase):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class FieldError(BaseModel):
    field_id: str
    message: str


FormField.model_rebuild()
