from ..models.member import Member
from ..models.submission import PendingSubmission, SubmissionKind, SubmissionStatus
from ..models.credential import LoginCredential, CredentialRole
from ..models.counter import SerialCounter
from ..models.news import News, Priority
from ..models.event import Event
from ..db.base_class import Base
