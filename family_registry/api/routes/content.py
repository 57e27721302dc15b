from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...core.errors import NotFound
from ...models.credential import LoginCredential
from ...models.event import Event
from ...models.news import News
from ...schemas.content import NewsCreate, NewsUpdate, NewsOut, EventCreate, EventUpdate, EventOut
from ...services.content_service import (
    create_news,
    create_event,
    list_news,
    list_events,
    update_content,
    delete_content,
)
from ..deps import get_db, get_current_credential, require_admin, current_member, ADMIN_ROLES

news_router = APIRouter()
events_router = APIRouter()


def _viewer(db: Session, current: LoginCredential) -> tuple[str | None, bool]:
    member = current_member(db, current)
    return (member.vansh if member else None), current.role in ADMIN_ROLES


def _author(db: Session, current: LoginCredential) -> tuple[int | None, str]:
    member = current_member(db, current)
    if member:
        return member.ser_no, member.full_name or current.username
    return None, current.username


# ---- news ----

@news_router.get("/", response_model=list[NewsOut])
def get_news(category: str | None = None, db: Session = Depends(get_db),
             current: LoginCredential = Depends(get_current_credential)):
    vansh, see_all = _viewer(db, current)
    return list_news(db, vansh=vansh, see_all=see_all, category=category)

@news_router.post("/", response_model=NewsOut, status_code=status.HTTP_201_CREATED)
def post_news(payload: NewsCreate, db: Session = Depends(get_db),
              current: LoginCredential = Depends(get_current_credential)):
    ser_no, name = _author(db, current)
    return create_news(db, author_ser_no=ser_no, author_name=name, **payload.model_dump())

@news_router.put("/{news_id}", response_model=NewsOut)
def put_news(news_id: str, payload: NewsUpdate, db: Session = Depends(get_db),
             admin: LoginCredential = Depends(require_admin)):
    try:
        return update_content(db, News, news_id, **payload.model_dump(exclude_unset=True))
    except NotFound:
        raise HTTPException(404, "News not found")

@news_router.delete("/{news_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_news(news_id: str, db: Session = Depends(get_db), admin: LoginCredential = Depends(require_admin)):
    try:
        delete_content(db, News, news_id)
    except NotFound:
        raise HTTPException(404, "News not found")


# ---- events ----

@events_router.get("/", response_model=list[EventOut])
def get_events(event_type: str | None = None, db: Session = Depends(get_db),
               current: LoginCredential = Depends(get_current_credential)):
    vansh, see_all = _viewer(db, current)
    return list_events(db, vansh=vansh, see_all=see_all, event_type=event_type)

@events_router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def post_event(payload: EventCreate, db: Session = Depends(get_db),
               current: LoginCredential = Depends(get_current_credential)):
    ser_no, name = _author(db, current)
    return create_event(db, created_by_ser_no=ser_no, created_by_name=name, **payload.model_dump())

@events_router.put("/{event_id}", response_model=EventOut)
def put_event(event_id: str, payload: EventUpdate, db: Session = Depends(get_db),
              admin: LoginCredential = Depends(require_admin)):
    try:
        return update_content(db, Event, event_id, **payload.model_dump(exclude_unset=True))
    except NotFound:
        raise HTTPException(404, "Event not found")

@events_router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_event(event_id: str, db: Session = Depends(get_db), admin: LoginCredential = Depends(require_admin)):
    try:
        delete_content(db, Event, event_id)
    except NotFound:
        raise HTTPException(404, "Event not found")
