from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column
from ..db.base_class import Base

MEMBER_SER_NO = "member"

class SerialCounter(Base):
    """High-water mark of issued serial numbers; only ever moves up."""
    name: Mapped[str] = mapped_column(String(32), primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
