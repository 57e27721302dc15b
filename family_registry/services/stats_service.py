from sqlalchemy.orm import Session
from sqlalchemy import select, func
from ..models.submission import PendingSubmission, SubmissionStatus
from ..models.member import Member
from ..models.credential import LoginCredential
from ..models.news import News
from ..models.event import Event

def _count(db: Session, model, *where) -> int:
    q = select(func.count()).select_from(model)
    if where:
        q = q.where(*where)
    return db.execute(q).scalar_one()

def registry_stats(db: Session) -> dict[str, int]:
    return {
        "pending_registrations": _count(db, PendingSubmission, PendingSubmission.status == SubmissionStatus.PENDING),
        "approved_registrations": _count(db, PendingSubmission, PendingSubmission.status == SubmissionStatus.APPROVED),
        "rejected_registrations": _count(db, PendingSubmission, PendingSubmission.status == SubmissionStatus.REJECTED),
        "total_members": _count(db, Member),
        "total_logins": _count(db, LoginCredential),
        "total_news": _count(db, News),
        "total_events": _count(db, Event),
    }
