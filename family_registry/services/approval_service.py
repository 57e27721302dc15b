from dataclasses import dataclass
import logging
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.errors import (
    AlreadyApproved,
    AlreadyProcessed,
    ConflictError,
    DependencyError,
    NotFound,
    TransientFailure,
    ValidationError,
)
from ..models.member import Member
from ..models.submission import PendingSubmission, SubmissionStatus
from ..models import utcnow
from .credential_service import build_credential, get_by_email, get_by_username, normalize_username
from .member_service import link_child
from .security import hash_password, generate_temporary_password
from .serial_service import allocate_ser_no
from .submission_service import member_fields_from_form

logger = logging.getLogger(__name__)


@dataclass
class ApprovalResult:
    member: Member
    credential_created: bool
    login_username: str | None = None
    temporary_credential_hint: str | None = None


def _raise_not_pending(sub: PendingSubmission | None) -> None:
    if sub is None:
        raise NotFound("Submission not found")
    if sub.status == SubmissionStatus.APPROVED:
        raise AlreadyApproved("This submission is already approved")
    raise AlreadyProcessed(f"This submission is already {sub.status.value}")


def _claim(db: Session, submission_id: str, to_status: SubmissionStatus, **values) -> bool:
    result = db.execute(
        update(PendingSubmission)
        .where(
            PendingSubmission.id == submission_id,
            PendingSubmission.status == SubmissionStatus.PENDING,
        )
        .values(status=to_status, **values)
        .execution_options(synchronize_session="evaluate")
    )
    return result.rowcount == 1


def _approve_once(
    db: Session, *,
    settings: Settings,
    submission_id: str,
    approver_id: str | None,
    approval_comments: str | None,
    username: str | None,
    password: str | None,
) -> ApprovalResult:
    sub = db.get(PendingSubmission, submission_id, populate_existing=True)
    if sub is None or sub.status != SubmissionStatus.PENDING:
        _raise_not_pending(sub)
    # validated before anything is written
    fields = member_fields_from_form(sub.form_data)

    email = fields.get("email")
    login_name = normalize_username(username) if username else email
    hashed_password = None
    temporary = False
    if login_name:
        # hashed up front so the write lock below is held as briefly as possible
        if not password:
            password = generate_temporary_password(settings=settings)
            temporary = True
        hashed_password = hash_password(password, settings=settings)

    now = utcnow()
    if not _claim(db, submission_id, SubmissionStatus.APPROVED,
                  reviewed_by=approver_id, reviewed_at=now,
                  approval_comments=approval_comments or ""):
        db.rollback()
        _raise_not_pending(db.get(PendingSubmission, submission_id, populate_existing=True))

    ser_no = allocate_ser_no(db)
    member = Member(
        **fields,
        ser_no=ser_no,
        submission_id=sub.id,
        approved_by=approver_id,
        approved_at=now,
    )
    db.add(member)
    link_child(db, member.father_ser_no, ser_no)

    credential_created = False
    existing = get_by_email(db, email) if email else None
    if existing is not None:
        # one login per email address; the new member is approved without one
        login_name = existing.username
    elif login_name:
        if username and get_by_username(db, login_name) is not None:
            raise ValidationError(f"Login {login_name} already exists")
        db.add(build_credential(username=login_name, email=email,
                                hashed_password=hashed_password, subject_id=ser_no))
        credential_created = True
    sub.member_ser_no = ser_no

    try:
        db.flush()
    except IntegrityError as e:
        raise ConflictError(f"ser_no {ser_no} or login {login_name} taken concurrently") from e
    db.commit()

    hint = None
    if credential_created:
        hint = (f"Temporary password issued for login '{login_name}'; reset it before sharing"
                if temporary else f"Login '{login_name}' created with the supplied password")
    logger.info(f"Submission {submission_id} approved by {approver_id}: ser_no={ser_no}, "
                f"credential_created={credential_created}")
    return ApprovalResult(member=member, credential_created=credential_created,
                          login_username=login_name, temporary_credential_hint=hint)


def approve_submission(
    db: Session, *,
    settings: Settings,
    submission_id: str,
    approver_id: str | None,
    approval_comments: str | None = None,
    username: str | None = None,
    password: str | None = None,
) -> ApprovalResult:
    attempts = settings.APPROVAL_MAX_RETRIES + 1
    last_conflict: ConflictError | None = None
    for attempt in range(attempts):
        try:
            return _approve_once(
                db,
                settings=settings,
                submission_id=submission_id,
                approver_id=approver_id,
                approval_comments=approval_comments,
                username=username,
                password=password,
            )
        except ConflictError as e:
            db.rollback()
            last_conflict = e
            logger.warning(f"Approval of {submission_id} collided (attempt {attempt + 1}): {e}")
        except OperationalError as e:
            db.rollback()
            logger.error(f"Store unavailable while approving {submission_id}: {str(e)}", exc_info=True)
            raise DependencyError("Database unavailable") from e
        except Exception:
            db.rollback()
            raise
    raise TransientFailure(f"Could not approve {submission_id} after {attempts} attempts") from last_conflict


def reject_submission(
    db: Session, *,
    submission_id: str,
    approver_id: str | None,
    reason: str | None = None,
) -> PendingSubmission:
    try:
        claimed = _claim(db, submission_id, SubmissionStatus.REJECTED,
                         reviewed_by=approver_id, reviewed_at=utcnow(),
                         rejection_reason=reason or "")
        if not claimed:
            db.rollback()
            _raise_not_pending(db.get(PendingSubmission, submission_id, populate_existing=True))
        db.commit()
    except OperationalError as e:
        db.rollback()
        raise DependencyError("Database unavailable") from e
    sub = db.get(PendingSubmission, submission_id, populate_existing=True)
    logger.info(f"Submission {submission_id} rejected by {approver_id}")
    return sub
