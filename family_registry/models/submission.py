from enum import StrEnum
from sqlalchemy import String, DateTime, Integer, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from uuid import uuid4

from ..db.base_class import Base
from . import utcnow


class SubmissionKind(StrEnum):
    HIERARCHY_FORM = "hierarchy_form"
    TEMP_MEMBER = "temp_member"


class SubmissionStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PendingSubmission(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    kind: Mapped[SubmissionKind] = mapped_column(default=SubmissionKind.HIERARCHY_FORM, index=True)
    status: Mapped[SubmissionStatus] = mapped_column(default=SubmissionStatus.PENDING, index=True)
    form_data: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)

    submitted_by: Mapped[str | None] = mapped_column(String(36))
    submitted_by_name: Mapped[str | None] = mapped_column(String(128))
    submitted_by_email: Mapped[str | None] = mapped_column(String(255))
    submitted_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    reviewed_by: Mapped[str | None] = mapped_column(String(36))
    reviewed_at: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True))
    approval_comments: Mapped[str | None] = mapped_column(Text)
    rejection_reason: Mapped[str | None] = mapped_column(Text)
    member_ser_no: Mapped[int | None] = mapped_column(Integer)

    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
