from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_
import logging
from ..core.config import Settings
from ..core.errors import AccountLocked, ConflictError, NotFound, ValidationError
from ..models.credential import LoginCredential, CredentialRole
from ..models import utcnow
from .security import hash_password, verify_password

logger = logging.getLogger(__name__)

def _as_utc(dt: datetime | None) -> datetime | None:
    # normalize tz to avoid “offset-naive vs offset-aware” (SQLite drops tzinfo)
    if dt is None:
        return None
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt.astimezone(timezone.utc)

def normalize_username(username: str) -> str:
    return username.strip().lower()

def get_by_username(db: Session, username: str) -> LoginCredential | None:
    name = normalize_username(username)
    return db.execute(
        select(LoginCredential).where(func.lower(LoginCredential.username) == name)
    ).scalar_one_or_none()

def get_by_email(db: Session, email: str) -> LoginCredential | None:
    # older logins used the email itself as the username
    address = normalize_username(email)
    return db.execute(
        select(LoginCredential)
        .where(or_(LoginCredential.email == address, func.lower(LoginCredential.username) == address))
        .limit(1)
    ).scalar_one_or_none()

def build_credential(*, username: str, hashed_password: str, email: str | None = None,
                     subject_id: int | None = None, role: CredentialRole = CredentialRole.USER) -> LoginCredential:
    """Unsaved credential; the caller owns the transaction."""
    return LoginCredential(
        username=normalize_username(username),
        email=normalize_username(email) if email else None,
        hashed_password=hashed_password,
        subject_id=subject_id,
        role=role,
        is_active=True,
    )

def create_credential(db: Session, *, settings: Settings, username: str, password: str, email: str | None = None,
                      subject_id: int | None = None, role: CredentialRole = CredentialRole.USER) -> LoginCredential:
    if not username or not username.strip() or not password:
        raise ValidationError("username and password are required")
    if get_by_username(db, username):
        raise ValidationError(f"Login {normalize_username(username)} already exists")
    try:
        cred = build_credential(username=username, email=email, subject_id=subject_id, role=role,
                                hashed_password=hash_password(password, settings=settings))
        db.add(cred)
        db.commit()
        db.refresh(cred)
        logger.info(f"Credential created: id={cred.id}, username={cred.username}, role={cred.role}")
        return cred
    except Exception as e:
        logger.error(f"Error creating credential {username}: {str(e)}", exc_info=True)
        db.rollback()
        raise

def register(db: Session, *, settings: Settings, email: str, password: str, confirm_password: str) -> LoginCredential:
    if password != confirm_password:
        raise ValidationError("Passwords do not match")
    if get_by_email(db, email):
        raise ConflictError("Email already registered")
    return create_credential(db, settings=settings, username=email, email=email, password=password)

def authenticate(db: Session, username: str, password: str, *, settings: Settings) -> LoginCredential | None:
    cred = get_by_username(db, username)
    if not cred or not cred.is_active:
        return None

    now = datetime.now(timezone.utc)
    lock_until = _as_utc(cred.lock_until)
    if lock_until and lock_until > now:
        logger.warning(f"Login refused for locked account {cred.username} until {lock_until.isoformat()}")
        raise AccountLocked(f"Account locked until {lock_until.isoformat()}")

    if not verify_password(password, cred.hashed_password, settings=settings):
        cred.failed_attempts = (cred.failed_attempts or 0) + 1
        if cred.failed_attempts >= settings.MAX_FAILED_LOGINS:
            cred.lock_until = now + timedelta(minutes=settings.LOCKOUT_MINUTES)
            cred.failed_attempts = 0
            logger.warning(f"Account {cred.username} locked after {settings.MAX_FAILED_LOGINS} failed logins")
        db.commit()
        return None

    cred.failed_attempts = 0
    cred.lock_until = None
    cred.last_login = utcnow()
    db.commit()
    db.refresh(cred)
    return cred

def list_credentials(db: Session, *, search: str | None = None) -> list[LoginCredential]:
    q = select(LoginCredential).order_by(LoginCredential.created_at.desc())
    if search:
        q = q.where(LoginCredential.username.ilike(f"%{search.strip().lower()}%"))
    return list(db.execute(q).scalars())

def reset_password(db: Session, *, settings: Settings, credential_id: str, new_password: str) -> LoginCredential:
    if not new_password:
        raise ValidationError("new_password is required")
    cred = db.get(LoginCredential, credential_id)
    if not cred:
        raise NotFound("Login record not found")
    cred.hashed_password = hash_password(new_password, settings=settings)
    cred.failed_attempts = 0
    cred.lock_until = None
    db.commit()
    db.refresh(cred)
    logger.info(f"Password reset for credential {cred.username}")
    return cred

def toggle_active(db: Session, *, credential_id: str) -> LoginCredential:
    cred = db.get(LoginCredential, credential_id)
    if not cred:
        raise NotFound("Login record not found")
    cred.is_active = not cred.is_active
    db.commit()
    db.refresh(cred)
    logger.info(f"Account {cred.username} {'enabled' if cred.is_active else 'disabled'}")
    return cred
