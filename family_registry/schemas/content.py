from pydantic import BaseModel
from datetime import datetime
from .common import ORMModel
from ..models.news import Priority
class NewsCreate(BaseModel):
    title: str
    content: str
    summary: str | None = None
    category: str | None = None
    priority: Priority = Priority.LOW
    tags: list[str] = []
    is_published: bool = True
    visible_to_all_vansh: bool = True
    visible_vansh_numbers: list[str] = []
class NewsUpdate(BaseModel):
    title: str | None = None
    content: str | None = None
    summary: str | None = None
    category: str | None = None
    priority: Priority | None = None
    tags: list[str] | None = None
    is_published: bool | None = None
    visible_to_all_vansh: bool | None = None
    visible_vansh_numbers: list[str] | None = None
class NewsOut(ORMModel):
    id: str
    title: str
    content: str
    summary: str | None = None
    category: str | None = None
    priority: str
    tags: list[str]
    author_ser_no: int | None = None
    author_name: str | None = None
    is_published: bool
    visible_to_all_vansh: bool
    visible_vansh_numbers: list[str]
    created_at: datetime
class EventCreate(BaseModel):
    title: str
    description: str | None = None
    location: str | None = None
    event_date: datetime | None = None
    event_type: str | None = None
    priority: Priority = Priority.MEDIUM
    is_published: bool = True
    visible_to_all_vansh: bool = True
    visible_vansh_numbers: list[str] = []
class EventUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    location: str | None = None
    event_date: datetime | None = None
    event_type: str | None = None
    priority: Priority | None = None
    is_published: bool | None = None
    visible_to_all_vansh: bool | None = None
    visible_vansh_numbers: list[str] | None = None
class EventOut(ORMModel):
    id: str
    title: str
    description: str | None = None
    location: str | None = None
    event_date: datetime | None = None
    event_type: str | None = None
    priority: str
    created_by_ser_no: int | None = None
    created_by_name: str | None = None
    is_published: bool
    visible_to_all_vansh: bool
    visible_vansh_numbers: list[str]
