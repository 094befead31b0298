"""Display status for a form submission.

Approval outranks dispatching, which outranks the acceptance decision.
Unknown values are treated as unset.
"""
from typing import Any, Dict, Optional

APPROVAL_LABELS = {
    "accepted": ("Approved", "success"),
    "reserved": ("Approved with Reserve", "warning"),
    "rejected": ("Rejected", "danger"),
}

DECISION_LABELS = {
    "accepted": ("Accepted", "success"),
    "reserved": ("Accepted under Reserve", "warning"),
    "rejected": ("Not Accepted", "danger"),
}

DISPATCHING_VALUES = {"pending", "dispatched", "in_review", "completed"}

UNDER_REVIEW = ("Under Review", "info")
DEFAULT_STATUS = ("Under Review", "neutral")


def _normalize(value: Any) -> Optional[str]:
    if value is None:
        return None
    if hasattr(value, "value"):
        value = value.value
    value = str(value).strip().lower()
    return value or None


def derive_submission_status(
    approval_status: Any = None,
    dispatching_status: Any = None,
    decision_status: Any = None,
) -> Dict[str, str]:
    approval = _normalize(approval_status)
    if approval in APPROVAL_LABELS:
        label, tone = APPROVAL_LABELS[approval]
        return {"label": label, "tone": tone}

    if _normalize(dispatching_status) in DISPATCHING_VALUES:
        label, tone = UNDER_REVIEW
        return {"label": label, "tone": tone}

    decision = _normalize(decision_status)
    if decision in DECISION_LABELS:
        label, tone = DECISION_LABELS[decision]
        return {"label": label, "tone": tone}

    label, tone = DEFAULT_STATUS
    return {"label": label, "tone": tone}


def status_for_submission(submission) -> Dict[str, str]:
    return derive_submission_status(
        approval_status=getattr(submission, "approval_status", None),
        dispatching_status=getattr(submission, "dispatching_status", None),
        decision_status=getattr(submission, "decision_status", None),
    )
