from typing import Any
from sqlalchemy.orm import Session
from sqlalchemy import select
from pydantic import ValidationError as SchemaError
import logging
from ..core.errors import NotFound, ValidationError
from ..models.submission import PendingSubmission, SubmissionKind, SubmissionStatus
from ..schemas.legacy import LegacyMemberIn

logger = logging.getLogger(__name__)

def member_fields_from_form(form_data: dict[str, Any]) -> dict[str, Any]:
    """Canonical Member fields for a submission, or ValidationError if it names nobody."""
    try:
        fields = LegacyMemberIn.model_validate(form_data or {}).member_fields()
    except SchemaError as e:
        raise ValidationError(f"formData is invalid: {e.error_count()} field error(s)") from e
    # a serial number is assigned on approval, never taken from the form
    fields.pop("ser_no", None)
    if not fields.get("email") and not fields.get("first_name") and not fields.get("last_name"):
        raise ValidationError("formData needs at least an email or a name")
    return fields

def create_submission(
    db: Session, *,
    form_data: dict[str, Any],
    kind: SubmissionKind = SubmissionKind.HIERARCHY_FORM,
    submitted_by: str | None = None,
    submitted_by_name: str | None = None,
    submitted_by_email: str | None = None,
) -> PendingSubmission:
    member_fields_from_form(form_data)
    sub = PendingSubmission(
        kind=kind,
        form_data=form_data,
        submitted_by=submitted_by,
        submitted_by_name=submitted_by_name,
        submitted_by_email=submitted_by_email,
    )
    db.add(sub)
    db.commit()
    db.refresh(sub)
    logger.info(f"Submission received: id={sub.id}, kind={sub.kind}")
    return sub

def get_submission(db: Session, submission_id: str) -> PendingSubmission:
    sub = db.get(PendingSubmission, submission_id)
    if not sub:
        raise NotFound("Submission not found")
    return sub

def list_submissions(
    db: Session, *,
    status: SubmissionStatus | None = SubmissionStatus.PENDING,
    kind: SubmissionKind | None = None,
) -> list[PendingSubmission]:
    q = select(PendingSubmission).order_by(PendingSubmission.submitted_at.desc())
    if status:
        q = q.where(PendingSubmission.status == status)
    if kind:
        q = q.where(PendingSubmission.kind == kind)
    return list(db.execute(q).scalars())
