from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app import crud, schemas
from app.api import deps
from app.db.database import get_db
from app.models.user import User
from app.services.email_sender import AttachmentUploadError, send_bulk
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/", response_model=List[schemas.EmailTemplate])
def list_email_templates(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    """Get email templates of the signed-in organizer"""
    return crud.email_template.get_multi_by_owner(db, user_id=current_user.id)

@router.post("/", response_model=schemas.EmailTemplate, status_code=status.HTTP_201_CREATED)
def create_email_template(
    *,
    db: Session = Depends(get_db),
    template_in: schemas.EmailTemplateCreate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    return crud.email_template.create(db, obj_in=template_in, user_id=current_user.id)

@router.get("/{template_id}", response_model=schemas.EmailTemplate)
def get_email_template(
    *,
    db: Session = Depends(get_db),
    template_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    return deps.ensure_owner(crud.email_template.get(db, id=template_id), current_user, "Template")

@router.put("/{template_id}", response_model=schemas.EmailTemplate)
def update_email_template(
    *,
    db: Session = Depends(get_db),
    template_id: int,
    template_in: schemas.EmailTemplateUpdate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    template = deps.ensure_owner(crud.email_template.get(db, id=template_id), current_user, "Template")
    for field in ("title", "subject", "body"):
        value = getattr(template_in, field)
        if value is not None and not value.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Email {field} is required")
    return crud.email_template.update(db, db_obj=template, obj_in=template_in)

@router.delete("/{template_id}")
def delete_email_template(
    *,
    db: Session = Depends(get_db),
    template_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    deps.ensure_owner(crud.email_template.get(db, id=template_id), current_user, "Template")
    crud.email_template.remove(db, id=template_id)
    return {"message": "Template deleted successfully"}

@router.post("/send", response_model=schemas.BulkEmailResult)
def send_bulk_email(
    *,
    db: Session = Depends(get_db),
    request: schemas.BulkEmailRequest,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    """Send a template (or ad hoc subject/body) to every recipient, one at a time."""
    subject, body, attachments = request.subject, request.body, list(request.attachments)
    if request.template_id is not None:
        template = deps.ensure_owner(
            crud.email_template.get(db, id=request.template_id), current_user, "Template"
        )
        subject = subject or template.subject
        body = body or template.body
        attachments = attachments or list(template.attachments or [])

    if not subject or not subject.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email subject is required")
    if not body or not body.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email content is required")
    if not request.recipients:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="At least one recipient is required")

    try:
        result = send_bulk(subject, body, request.recipients, attachments)
    except AttachmentUploadError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    logger.info(f"{current_user.email} sent {result['sent']}/{result['total']} emails")
    return result
