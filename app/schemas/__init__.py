# File: app/schemas/__init__.py
from .auth import Token, TokenData, LoginRequest
from .user import User, UserCreate, UserUpdate, UserBase
from .event import Event, EventCreate, EventUpdate
from .form import (
    Form, FormCreate, FormUpdate, FormField, FormSection, FormSubsection,
    GeneralInfoSettings, FormActions, FieldError,
)
from .form_submission import (
    FormSubmission, FormSubmissionCreate, FormSubmissionUpdate, GeneralInfo,
    DecisionUpdate, ApprovalUpdate, DispatchingStatusUpdate, BulkDeleteRequest,
    SubmissionStatusLabel, ApprovalResult,
)
from .form_answer import FormAnswer
from .evaluation_answer import EvaluationAnswer, EvaluationAnswerCreate
from .committee import (
    Committee, CommitteeCreate, CommitteeUpdate,
    CommitteeMember, CommitteeMemberCreate, CommitteeMemberUpdate,
    JuryMember, JuryMemberUpsert,
)
from .dispatch import DispatchSave, DispatchSubmission, DispatchedItem, SubmissionReviewProgress
from .review import ReviewSave, ParticipantReview
from .badge_template import (
    BadgeElement, BadgeTemplate, BadgeTemplateCreate, BadgeTemplateUpdate,
    BadgeGenerateRequest, BadgeLookupRequest, ParticipantBadge,
)
from .email import (
    EmailTemplate, EmailTemplateCreate, EmailTemplateUpdate, EmailAttachment,
    EmailRecipient, BulkEmailRequest, BulkEmailResult, RecipientResult, SendEmailRequest,
)
from .checkin import CheckinToggle, CheckinBulkToggle, CheckinSet, RegistrationCheckin, BulkCheckinResult
