from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
import logging

from ...core.config import Settings
from ...core.errors import (
    AlreadyProcessed,
    DependencyError,
    NotFound,
    TransientFailure,
    ValidationError,
)
from ...models.credential import LoginCredential
from ...models.submission import SubmissionKind, SubmissionStatus
from ...schemas.auth import CredentialOut, ResetPasswordIn
from ...schemas.member import MemberOut, MemberUpdate
from ...schemas.submission import SubmissionOut, ApproveIn, RejectIn, ApprovalOut
from ...services.approval_service import approve_submission, reject_submission
from ...services.credential_service import list_credentials, reset_password, toggle_active
from ...services.serial_service import next_ser_no
from ...services.stats_service import registry_stats
from ...services.submission_service import get_submission, list_submissions
from ...services.member_service import delete_member, update_member
from ..deps import get_db, get_settings, require_admin

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/submissions", response_model=list[SubmissionOut])
def submissions(
    status_filter: SubmissionStatus | None = Query(SubmissionStatus.PENDING, alias="status"),
    kind: SubmissionKind | None = None,
    db: Session = Depends(get_db),
    admin: LoginCredential = Depends(require_admin),
):
    return list_submissions(db, status=status_filter, kind=kind)

@router.get("/submissions/{submission_id}", response_model=SubmissionOut)
def submission(submission_id: str, db: Session = Depends(get_db), admin: LoginCredential = Depends(require_admin)):
    try:
        return get_submission(db, submission_id)
    except NotFound:
        raise HTTPException(404, "Submission not found")

@router.post("/submissions/{submission_id}/approve", response_model=ApprovalOut)
def approve(
    submission_id: str,
    payload: ApproveIn | None = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    admin: LoginCredential = Depends(require_admin),
):
    payload = payload or ApproveIn()
    try:
        result = approve_submission(
            db,
            settings=settings,
            submission_id=submission_id,
            approver_id=admin.id,
            approval_comments=payload.approval_comments,
            username=payload.username,
            password=payload.password,
        )
    except NotFound as e:
        raise HTTPException(404, e.message)
    except AlreadyProcessed as e:
        raise HTTPException(status.HTTP_409_CONFLICT, e.message)
    except ValidationError as e:
        raise HTTPException(422, e.message)
    except (TransientFailure, DependencyError) as e:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, e.message)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Approval error for submission {submission_id}: {str(e)}", exc_info=True)
        raise HTTPException(500, f"Approval failed: {str(e)}")
    return ApprovalOut(
        member=MemberOut.model_validate(result.member),
        credentials_issued=result.credential_created,
        login_username=result.login_username,
        temporary_credential_hint=result.temporary_credential_hint,
    )

@router.post("/submissions/{submission_id}/reject", response_model=SubmissionOut)
def reject(
    submission_id: str,
    payload: RejectIn | None = None,
    db: Session = Depends(get_db),
    admin: LoginCredential = Depends(require_admin),
):
    payload = payload or RejectIn()
    try:
        return reject_submission(db, submission_id=submission_id, approver_id=admin.id, reason=payload.reason)
    except NotFound as e:
        raise HTTPException(404, e.message)
    except AlreadyProcessed as e:
        raise HTTPException(status.HTTP_409_CONFLICT, e.message)
    except DependencyError as e:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, e.message)

@router.get("/next-ser-no")
def preview_next_ser_no(db: Session = Depends(get_db), admin: LoginCredential = Depends(require_admin)):
    return {"next_ser_no": next_ser_no(db)}

@router.put("/members/{ser_no}", response_model=MemberOut)
def edit_member(ser_no: int, payload: MemberUpdate, db: Session = Depends(get_db),
                admin: LoginCredential = Depends(require_admin)):
    try:
        return update_member(db, ser_no, payload.model_dump(exclude_unset=True))
    except NotFound as e:
        raise HTTPException(404, e.message)
    except ValidationError as e:
        raise HTTPException(422, e.message)

@router.delete("/members/{ser_no}", status_code=status.HTTP_204_NO_CONTENT)
def remove_member(ser_no: int, db: Session = Depends(get_db), admin: LoginCredential = Depends(require_admin)):
    try:
        delete_member(db, ser_no)
    except NotFound as e:
        raise HTTPException(404, e.message)

@router.get("/logins", response_model=list[CredentialOut])
def logins(search: str | None = None, db: Session = Depends(get_db), admin: LoginCredential = Depends(require_admin)):
    return list_credentials(db, search=search)

@router.put("/logins/{credential_id}/reset-password", response_model=CredentialOut)
def reset(credential_id: str, payload: ResetPasswordIn, db: Session = Depends(get_db),
          settings: Settings = Depends(get_settings), admin: LoginCredential = Depends(require_admin)):
    try:
        return reset_password(db, settings=settings, credential_id=credential_id, new_password=payload.new_password)
    except NotFound as e:
        raise HTTPException(404, e.message)
    except ValidationError as e:
        raise HTTPException(422, e.message)

@router.put("/logins/{credential_id}/toggle-status", response_model=CredentialOut)
def toggle(credential_id: str, db: Session = Depends(get_db), admin: LoginCredential = Depends(require_admin)):
    if credential_id == admin.id:
        raise HTTPException(400, "Cannot disable your own account")
    try:
        return toggle_active(db, credential_id=credential_id)
    except NotFound as e:
        raise HTTPException(404, e.message)

@router.get("/stats")
def stats(db: Session = Depends(get_db), admin: LoginCredential = Depends(require_admin)):
    return registry_stats(db)
