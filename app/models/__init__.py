from .base import BaseModel
from .user import User, UserRole
from .event import Event
from .form import RegistrationForm, EvaluationForm
from .form_submission import FormSubmission, DecisionStatus, ApprovalStatus, DispatchingStatus
from .form_answer import FormAnswer
from .evaluation_answer import EvaluationAnswer
from .committee import Committee, CommitteeMember, JuryMember
from .dispatch import DispatchSubmission
from .review import ParticipantReview, ReviewStatus
from .badge_template import BadgeTemplate
from .participant_badge import ParticipantBadge
from .email_template import EmailTemplate
from .checkin import RegistrationCheckin, CheckinStatus
