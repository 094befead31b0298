# File: app/api/v1/endpoints/submissions.py
from datetime import date
from typing import Any, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from app import crud, schemas
from app.api import deps
from app.db.database import get_db
from app.models.form_submission import FormSubmission
from app.models.user import User
from app.services.badge_generation import generate_and_save_badge
from app.services.csv_export import export_submissions_csv
from app.services.form_answers import answer_rows_to_dict
from app.services.form_schema import validate_answers
from app.services.submission_emails import send_submission_emails
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _owned_submission(db: Session, submission_id: int, current_user: User) -> FormSubmission:
    return deps.ensure_owner(crud.form_submission.get(db, id=submission_id), current_user, "Submission")


@router.post("/", response_model=schemas.FormSubmission, status_code=status.HTTP_201_CREATED)
def create_submission(
    *,
    db: Session = Depends(get_db),
    submission_in: schemas.FormSubmissionCreate,
    current_user: Optional[User] = Depends(deps.get_optional_user),
) -> Any:
    """Submit a registration form. Anonymous participants are allowed."""
    form = crud.registration_form.get(db, id=submission_in.form_id)
    if not form:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Form not found")
    event = crud.event.get(db, id=submission_in.event_id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")

    general_info = submission_in.general_info.dict(exclude_none=True)
    errors = validate_answers(form, general_info, submission_in.answers)
    if errors:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=errors)

    submission = crud.form_submission.create_with_answers(
        db,
        obj_in=submission_in,
        form=form,
        owner_id=form.user_id,
        event_title=event.name,
        participant_user_id=current_user.id if current_user else None,
    )
    logger.info(f"Submission {submission.id} received for form {form.id}, event {event.id}")

    send_submission_emails(form, submission)
    return submission


@router.get("/event/{event_id}", response_model=List[schemas.FormSubmission])
def list_event_submissions(
    *,
    db: Session = Depends(get_db),
    event_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    deps.ensure_owner(crud.event.get(db, id=event_id), current_user, "Event")
    return crud.form_submission.get_by_event(db, event_id=event_id)


@router.get("/form/{form_id}", response_model=List[schemas.FormSubmission])
def list_form_submissions(
    *,
    db: Session = Depends(get_db),
    form_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    deps.ensure_owner(crud.registration_form.get(db, id=form_id), current_user, "Form")
    return crud.form_submission.get_by_form(db, form_id=form_id)


@router.get("/form/{form_id}/export")
def export_form_submissions(
    *,
    db: Session = Depends(get_db),
    form_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Response:
    form = deps.ensure_owner(crud.registration_form.get(db, id=form_id), current_user, "Form")
    content = export_submissions_csv(form, crud.form_submission.get_by_form(db, form_id=form_id))
    filename = f"registrations_{form_id}_{date.today().isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/me", response_model=List[schemas.FormSubmission])
def list_my_submissions(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    return crud.form_submission.get_by_submitter(
        db, email=current_user.email, participant_user_id=current_user.id
    )


@router.post("/bulk-delete")
def bulk_delete_submissions(
    *,
    db: Session = Depends(get_db),
    request: schemas.BulkDeleteRequest,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    submissions = crud.form_submission.get_many(db, ids=request.submission_ids)
    for submission in submissions:
        deps.ensure_owner(submission, current_user, "Submission")
    deleted = crud.form_submission.remove_many(db, ids=[s.id for s in submissions])
    logger.info(f"{current_user.email} deleted {deleted} submissions")
    return {"deleted": deleted}


@router.get("/{submission_id}", response_model=schemas.FormSubmission)
def get_submission(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    submission = crud.form_submission.get(db, id=submission_id)
    if not submission:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
    if submission.user_id != current_user.id and submission.participant_user_id != current_user.id \
            and submission.submitted_by != current_user.email:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
    return submission


@router.get("/{submission_id}/answers", response_model=List[schemas.FormAnswer])
def get_submission_answer_rows(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    _owned_submission(db, submission_id, current_user)
    return crud.form_answer.get_by_submission(db, submission_id=submission_id)


@router.get("/{submission_id}/answers/values")
def get_submission_answer_values(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    current_user: User = Depends(deps.get_current_organizer),
) -> dict:
    _owned_submission(db, submission_id, current_user)
    return answer_rows_to_dict(crud.form_answer.get_by_submission(db, submission_id=submission_id))


@router.put("/{submission_id}", response_model=schemas.FormSubmission)
def update_submission(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    submission_in: schemas.FormSubmissionUpdate,
    current_user: User = Depends(deps.get_current_active_user),
) -> Any:
    submission = crud.form_submission.get(db, id=submission_id)
    if not submission:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
    if submission.user_id != current_user.id and submission.participant_user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")

    form = crud.registration_form.get(db, id=submission.form_id)
    general_info = (
        submission_in.general_info.dict(exclude_none=True)
        if submission_in.general_info is not None else (submission.general_info or {})
    )
    answers = submission_in.answers if submission_in.answers is not None else (submission.answers or {})
    if form is not None:
        errors = validate_answers(form, general_info, answers)
        if errors:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=errors)

    return crud.form_submission.update(
        db, db_obj=submission, obj_in={"general_info": general_info, "answers": answers}
    )


@router.delete("/{submission_id}")
def delete_submission(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    current_user: User = Depends(deps.get_current_active_user),
) -> dict:
    submission = crud.form_submission.get(db, id=submission_id)
    if not submission:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
    if submission.user_id != current_user.id and submission.participant_user_id != current_user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not enough permissions")
    crud.form_submission.remove_many(db, ids=[submission_id])
    return {"message": "Submission deleted successfully"}


@router.put("/{submission_id}/decision", response_model=schemas.FormSubmission)
def set_submission_decision(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    decision_in: schemas.DecisionUpdate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    submission = _owned_submission(db, submission_id, current_user)
    if decision_in.accepted_event_id is not None and not crud.event.get(db, id=decision_in.accepted_event_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Accepted event not found")
    return crud.form_submission.set_decision(
        db,
        db_obj=submission,
        decision_status=decision_in.decision_status,
        decision_comment=decision_in.decision_comment,
        accepted_event_id=decision_in.accepted_event_id,
        decided_by=current_user.id,
    )


@router.put("/{submission_id}/approval", response_model=schemas.ApprovalResult)
def set_submission_approval(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    approval_in: schemas.ApprovalUpdate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    submission = _owned_submission(db, submission_id, current_user)
    submission = crud.form_submission.set_approval(
        db,
        db_obj=submission,
        approval_status=approval_in.approval_status,
        approval_comment=approval_in.approval_comment,
    )

    badge_generated, badge_error = False, None
    if approval_in.badge_template_id and approval_in.approval_status in ("accepted", "reserved"):
        try:
            generate_and_save_badge(
                db,
                user_id=current_user.id,
                submission=submission,
                badge_template_id=approval_in.badge_template_id,
            )
            badge_generated = True
        except Exception as e:
            # Approval stays recorded
            db.rollback()
            logger.exception(f"Badge generation failed for submission {submission.id}")
            badge_error = str(e)

    db.refresh(submission)
    return {"submission": submission, "badge_generated": badge_generated, "badge_error": badge_error}


@router.put("/{submission_id}/dispatching-status", response_model=schemas.FormSubmission)
def set_submission_dispatching_status(
    *,
    db: Session = Depends(get_db),
    submission_id: int,
    status_in: schemas.DispatchingStatusUpdate,
    current_user: User = Depends(deps.get_current_organizer),
) -> Any:
    submission = _owned_submission(db, submission_id, current_user)
    return crud.form_submission.set_dispatching_status(
        db, db_obj=submission, dispatching_status=status_in.dispatching_status
    )
