from __future__ import annotations
from enum import StrEnum
from sqlalchemy import String, DateTime, ForeignKey, Boolean, Integer
from sqlalchemy.orm import Mapped, mapped_column
from uuid import uuid4
from ..db.base_class import Base
from . import utcnow

class CredentialRole(StrEnum):
    USER = "user"
    ADMIN = "admin"
    DBA = "dba"

class LoginCredential(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    # member ser_no this login authenticates; NULL for standalone admin accounts
    subject_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("member.ser_no", ondelete="CASCADE"), unique=True, index=True)
    # always stored lower-cased; the unique index is what makes credential creation idempotent
    username: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    # lower-cased; one login per email address
    email: Mapped[str | None] = mapped_column(String(255), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[CredentialRole] = mapped_column(default=CredentialRole.USER)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True))
    failed_attempts: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    lock_until: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
