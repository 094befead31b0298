from .user import user
from .event import event
from .form import registration_form, evaluation_form
from .form_submission import form_submission
from .form_answer import form_answer
from .evaluation_answer import evaluation_answer
from .committee import committee, committee_member, jury_member
from .dispatch import dispatch
from .review import review
from .badge_template import badge_template, participant_badge
from .email_template import email_template
from .checkin import checkin
