from enum import StrEnum
from uuid import uuid4

from sqlalchemy import String, DateTime, Integer, Text, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column

from ..db.base_class import Base
from . import utcnow


class Priority(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class News(Base):
    __tablename__ = "news"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str | None] = mapped_column(String(500))
    category: Mapped[str | None] = mapped_column(String(64), index=True)
    priority: Mapped[Priority] = mapped_column(default=Priority.LOW)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    author_ser_no: Mapped[int | None] = mapped_column(Integer, index=True)
    author_name: Mapped[str | None] = mapped_column(String(128))

    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    visible_to_all_vansh: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    visible_vansh_numbers: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    created_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    updated_at: Mapped["DateTime"] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
