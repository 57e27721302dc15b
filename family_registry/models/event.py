from sqlalchemy import String, DateTime, Integer, Text, Boolean, JSON
from sqlalchemy.orm import Mapped, mapped_column
from uuid import uuid4

from .news import Priority
from ..db.base_class import Base
from . import utcnow

class Event(Base):
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    location: Mapped[str | None] = mapped_column(String(255))
    event_date: Mapped["DateTime | None"] = mapped_column(DateTime(timezone=True), index=True)
    event_type: Mapped[str | None] = mapped_column(String(64))
    priority: Mapped[Priority] = mapped_column(default=Priority.MEDIUM)
    created_by_ser_no: Mapped[int | None] = mapped_column(Integer)
    created_by_name: Mapped[str | None] = mapped_column(String(128))
    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    visible_to_all_vansh: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    visible_vansh_numbers: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    created_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped["DateTime"] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
