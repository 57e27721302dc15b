from typing import Any, TypeVar
from sqlalchemy.orm import Session
from sqlalchemy import select
import logging
from ..core.errors import NotFound
from ..models.news import News
from ..models.event import Event

logger = logging.getLogger(__name__)

Content = TypeVar("Content", News, Event)

def visible_to(item: News | Event, vansh: str | None) -> bool:
    """Published items scoped to all vansh, or to a list that contains the viewer's vansh."""
    if not item.is_published:
        return False
    if item.visible_to_all_vansh:
        return True
    if vansh is None:
        return False
    return str(vansh) in {str(v) for v in (item.visible_vansh_numbers or [])}

def create_news(db: Session, *, author_ser_no: int | None, author_name: str | None, **fields: Any) -> News:
    news = News(author_ser_no=author_ser_no, author_name=author_name, **fields)
    db.add(news)
    db.commit()
    db.refresh(news)
    logger.info(f"News created: id={news.id}, title={news.title}")
    return news

def create_event(db: Session, *, created_by_ser_no: int | None, created_by_name: str | None, **fields: Any) -> Event:
    event = Event(created_by_ser_no=created_by_ser_no, created_by_name=created_by_name, **fields)
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info(f"Event created: id={event.id}, title={event.title}")
    return event

def list_news(db: Session, *, vansh: str | None = None, see_all: bool = False, category: str | None = None) -> list[News]:
    q = select(News).order_by(News.created_at.desc())
    if category:
        q = q.where(News.category == category)
    items = db.execute(q).scalars().all()
    return [n for n in items if see_all or visible_to(n, vansh)]

def list_events(db: Session, *, vansh: str | None = None, see_all: bool = False, event_type: str | None = None) -> list[Event]:
    q = select(Event).order_by(Event.event_date.desc())
    if event_type:
        q = q.where(Event.event_type == event_type)
    items = db.execute(q).scalars().all()
    return [e for e in items if see_all or visible_to(e, vansh)]

def update_content(db: Session, model: type[Content], item_id: str, **changes: Any) -> Content:
    item = db.get(model, item_id)
    if not item:
        raise NotFound(f"{model.__name__} not found")
    for key, value in changes.items():
        if value is not None:
            setattr(item, key, value)
    db.commit()
    db.refresh(item)
    return item

def delete_content(db: Session, model: type[Content], item_id: str) -> None:
    item = db.get(model, item_id)
    if not item:
        raise NotFound(f"{model.__name__} not found")
    db.delete(item)
    db.commit()
    logger.info(f"{model.__name__} {item_id} deleted")
