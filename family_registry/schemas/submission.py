from datetime import datetime
from typing import Any
from pydantic import BaseModel, EmailStr, Field
from .common import ORMModel
from .member import MemberOut
from ..models.submission import SubmissionKind
class SubmissionCreate(BaseModel):
    kind: SubmissionKind = SubmissionKind.HIERARCHY_FORM
    form_data: dict[str, Any] = Field(default_factory=dict)
    submitted_by_name: str | None = None
    submitted_by_email: EmailStr | None = None
class SubmissionOut(ORMModel):
    id: str
    kind: str
    status: str
    form_data: dict[str, Any]
    submitted_by: str | None = None
    submitted_by_name: str | None = None
    submitted_by_email: str | None = None
    submitted_at: datetime
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    approval_comments: str | None = None
    rejection_reason: str | None = None
    member_ser_no: int | None = None
class ApproveIn(BaseModel):
    approval_comments: str | None = None
    # optional explicit login; defaults to the submitted email and a random temporary password
    username: str | None = None
    password: str | None = None
class RejectIn(BaseModel):
    reason: str | None = None
class ApprovalOut(BaseModel):
    member: MemberOut
    credentials_issued: bool
    login_username: str | None = None
    temporary_credential_hint: str | None = None
