from app.crud.base import CRUDBase
from app.models.form import RegistrationForm, EvaluationForm
from app.schemas.form import FormCreate, FormUpdate

class CRUDRegistrationForm(CRUDBase[RegistrationForm, FormCreate, FormUpdate]):
    pass

class CRUDEvaluationForm(CRUDBase[EvaluationForm, FormCreate, FormUpdate]):
    pass

registration_form = CRUDRegistrationForm(RegistrationForm)
evaluation_form = CRUDEvaluationForm(EvaluationForm)
