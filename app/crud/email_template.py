from app.crud.base import CRUDBase
from app.models.email_template import EmailTemplate
from app.schemas.email import EmailTemplateCreate, EmailTemplateUpdate

class CRUDEmailTemplate(CRUDBase[EmailTemplate, EmailTemplateCreate, EmailTemplateUpdate]):
    pass

email_template = CRUDEmailTemplate(EmailTemplate)
