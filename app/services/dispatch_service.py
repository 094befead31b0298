# File: app/services/dispatch_service.py
"""Review dispatching: assignment bookkeeping and reviewer-side lookups."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app import crud
from app.crud.dispatch import decode_dispatching
from app.models.dispatch import DispatchSubmission
from app.models.form_submission import FormSubmission, DispatchingStatus
from app.models.review import ReviewStatus

logger = logging.getLogger(__name__)

LOCKED_STATUSES = {DispatchingStatus.IN_REVIEW.value, DispatchingStatus.COMPLETED.value}


def dispatch_to_dict(row: DispatchSubmission) -> Dict[str, Any]:
    return {
        "id": row.id,
        "user_id": row.user_id,
        "event_id": row.event_id,
        "form_id": row.form_id,
        "dispatching": decode_dispatching(row.dispatching),
        "deadline": row.deadline,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
    }


def _resolve_form(db: Session, *, user_id: int, form_id: int):
    form = crud.evaluation_form.get(db, id=form_id)
    submission_type = "evaluation"
    if form is None:
        form = crud.registration_form.get(db, id=form_id)
        submission_type = "submission"
    if form is None:
        raise ValueError(f"Form {form_id} not found")
    if form.user_id != user_id:
        raise ValueError(f"Form {form_id} belongs to another organizer")
    return form, submission_type


def _validate_dispatching(
    db: Session, *, user_id: int, event_id: int, form_id: int, submission_type: str,
    dispatching: Dict[int, List[int]],
) -> None:
    member_ids = {member_id for members in dispatching.values() for member_id in members}
    members = {m.id: m for m in crud.committee_member.get_many(db, ids=list(member_ids))}
    foreign_members = sorted(
        member_id for member_id in member_ids
        if member_id not in members or members[member_id].user_id != user_id
    )
    if foreign_members:
        raise ValueError(f"Unknown committee members: {foreign_members}")

    submission_ids = list(dispatching)
    if submission_type == "evaluation":
        records = crud.evaluation_answer.get_many(db, ids=submission_ids)
        valid = {r.id for r in records if r.evaluation_form_id == form_id}
    else:
        records = crud.form_submission.get_many(db, ids=submission_ids)
        valid = {
            r.id for r in records
            if r.form_id == form_id
            and r.user_id == user_id
            and event_id in (r.event_id, r.accepted_event_id)
        }
    invalid = sorted(set(submission_ids) - valid)
    if invalid:
        raise ValueError(f"Submissions {invalid} do not belong to event {event_id}, form {form_id}")


def save_dispatch(
    db: Session,
    *,
    user_id: int,
    event_id: int,
    form_id: int,
    dispatching: Dict[int, List[int]],
    deadline: Optional[datetime] = None,
) -> DispatchSubmission:
    """Replace the assignment map and move submissions in or out of dispatch.

    Raises ValueError when the form, a submission or a committee member
    is not the caller's.
    """
    _, submission_type = _resolve_form(db, user_id=user_id, form_id=form_id)
    _validate_dispatching(
        db, user_id=user_id, event_id=event_id, form_id=form_id,
        submission_type=submission_type, dispatching=dispatching,
    )

    previous = crud.dispatch.get_for(db, user_id=user_id, event_id=event_id, form_id=form_id)
    previous_ids = set(decode_dispatching(previous.dispatching)) if previous else set()

    row = crud.dispatch.save(
        db,
        user_id=user_id,
        event_id=event_id,
        form_id=form_id,
        dispatching=dispatching,
        deadline=deadline,
    )

    assigned_ids = {int(sid) for sid, members in dispatching.items() if members}
    removed_ids = previous_ids - assigned_ids
    if submission_type == "submission":
        _sync_dispatching_status(db, assigned_ids, removed_ids)

    logger.info(
        f"Dispatch {row.id} saved for event {event_id}, form {form_id}: "
        f"{len(assigned_ids)} assigned, {len(removed_ids)} removed"
    )
    return row


def _sync_dispatching_status(db: Session, assigned_ids: set, removed_ids: set) -> None:
    changed = False
    for submission in crud.form_submission.get_many(db, ids=list(assigned_ids | removed_ids)):
        if submission.id in assigned_ids:
            if submission.dispatching_status not in LOCKED_STATUSES:
                submission.dispatching_status = DispatchingStatus.DISPATCHED.value
                changed = True
        elif submission.dispatching_status == DispatchingStatus.DISPATCHED.value:
            submission.dispatching_status = DispatchingStatus.PENDING.value
            changed = True
    if changed:
        db.commit()


def assigned_members(db: Session, *, event_id: int, submission_id: int, submission_type: str = "submission") -> set:
    """Committee member ids a submission is dispatched to within an event."""
    assigned: set = set()
    for row in crud.dispatch.get_by_event(db, event_id=event_id):
        is_evaluation = crud.evaluation_form.get(db, id=row.form_id) is not None
        if is_evaluation != (submission_type == "evaluation"):
            continue
        assigned.update(decode_dispatching(row.dispatching).get(submission_id, []))
    return assigned


def _member_statuses(reviews, member_ids) -> Dict[int, str]:
    # a member reviewing with several evaluation forms counts once; completed wins
    statuses: Dict[int, str] = {}
    for review in reviews:
        if review.participant_id not in member_ids:
            continue
        if statuses.get(review.participant_id) != ReviewStatus.COMPLETED.value:
            statuses[review.participant_id] = review.status
    return statuses


def review_progress(db: Session, row: DispatchSubmission) -> List[Dict[str, Any]]:
    """Assigned, draft and completed review counts per dispatched submission."""
    dispatching = decode_dispatching(row.dispatching)
    submissions = {s.id: s for s in crud.form_submission.get_many(db, ids=list(dispatching))}
    progress = []
    for submission_id, member_ids in dispatching.items():
        statuses = _member_statuses(crud.review.get_by_submission(db, submission_id=submission_id), member_ids)
        submission = submissions.get(submission_id)
        progress.append({
            "submission_id": submission_id,
            "assigned": len(member_ids),
            "drafts": sum(1 for s in statuses.values() if s == ReviewStatus.DRAFT.value),
            "completed": sum(1 for s in statuses.values() if s == ReviewStatus.COMPLETED.value),
            "dispatching_status": submission.dispatching_status if submission else None,
        })
    return progress


def refresh_submission_review_state(db: Session, *, submission_id: int, event_id: int) -> Optional[str]:
    """Recompute dispatching_status after a review was saved.

    Only reviews from members the submission is dispatched to count.
    Undispatched submissions are left alone.
    """
    submission = crud.form_submission.get(db, id=submission_id)
    if submission is None:
        return None

    assigned = assigned_members(db, event_id=event_id, submission_id=submission_id)
    if not assigned:
        return submission.dispatching_status

    statuses = _member_statuses(crud.review.get_by_submission(db, submission_id=submission_id), assigned)
    if not statuses:
        return submission.dispatching_status

    completed = {member_id for member_id, s in statuses.items() if s == ReviewStatus.COMPLETED.value}
    if assigned <= completed:
        status = DispatchingStatus.COMPLETED.value
    else:
        status = DispatchingStatus.IN_REVIEW.value

    if submission.dispatching_status != status:
        submission.dispatching_status = status
        db.commit()
    return status


def _submission_payload(submission: FormSubmission) -> Dict[str, Any]:
    return {
        "id": submission.id,
        "form_id": submission.form_id,
        "event_id": submission.event_id,
        "event_title": submission.event_title,
        "submitted_by": submission.submitted_by,
        "subscription_type": submission.subscription_type,
        "entity_name": submission.entity_name,
        "role": submission.role,
        "general_info": submission.general_info or {},
        "answers": submission.answers or {},
        "submitted_at": submission.created_at,
        "decision_status": submission.decision_status,
        "decision_comment": submission.decision_comment,
        "accepted_event_id": submission.accepted_event_id,
        "dispatching_status": submission.dispatching_status,
    }


def _evaluation_payload(answer) -> Dict[str, Any]:
    return {
        "id": answer.id,
        "evaluation_form_id": answer.evaluation_form_id,
        "submitted_by": answer.submitted_by,
        "general_info": answer.general_info or {},
        "answers": answer.answers or {},
        "submitted_at": answer.created_at,
    }


def get_dispatched_items_for_reviewer(db: Session, email: str) -> List[Dict[str, Any]]:
    """Every submission assigned to any committee-member record with this email."""
    member_ids = set(crud.committee_member.get_ids_by_email(db, email=email))
    if not member_ids:
        logger.info(f"No committee member records for {email}")
        return []

    items: List[Dict[str, Any]] = []
    for row in crud.dispatch.get_all_recent_first(db):
        try:
            dispatching = decode_dispatching(row.dispatching)
        except ValueError:
            logger.warning(f"Dispatch {row.id} has an unreadable assignment map")
            continue

        event = crud.event.get(db, id=row.event_id)
        if event is None:
            logger.warning(f"Event {row.event_id} not found for dispatch {row.id}")
            continue

        form = crud.evaluation_form.get(db, id=row.form_id)
        submission_type = "evaluation"
        if form is None:
            form = crud.registration_form.get(db, id=row.form_id)
            submission_type = "submission"
        if form is None:
            logger.warning(f"Form {row.form_id} not found for dispatch {row.id}")
            continue

        for submission_id, assigned in dispatching.items():
            if not member_ids.intersection(assigned):
                continue

            if submission_type == "evaluation":
                record = crud.evaluation_answer.get(db, id=submission_id)
                payload = _evaluation_payload(record) if record else None
            else:
                record = crud.form_submission.get(db, id=submission_id)
                payload = _submission_payload(record) if record else None

            if payload is None:
                logger.warning(f"Submission {submission_id} ({submission_type}) not found")
                continue

            items.append({
                "submission_id": submission_id,
                "submission_type": submission_type,
                "event_id": event.id,
                "event_name": event.name,
                "form_id": row.form_id,
                "form_title": form.title,
                "submission": payload,
                "dispatch_id": row.id,
                "deadline": row.deadline,
            })

    logger.info(f"Found {len(items)} dispatched items for {email}")
    return items


def get_dispatched_items_by_event(db: Session, email: str) -> Dict[int, List[Dict[str, Any]]]:
    grouped: Dict[int, List[Dict[str, Any]]] = {}
    for item in get_dispatched_items_for_reviewer(db, email):
        grouped.setdefault(item["event_id"], []).append(item)
    return grouped
