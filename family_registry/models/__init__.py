from datetime import datetime, timezone
def utcnow():
    return datetime.now(timezone.utc)
from .member import Member
from .submission import PendingSubmission
from .credential import LoginCredential
from .counter import SerialCounter
from .news import News
from .event import Event
