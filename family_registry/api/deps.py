from typing import Generator, Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
import jwt
from ..core.config import Settings
from ..models.credential import LoginCredential, CredentialRole
from ..models.member import Member
from ..services.member_service import get_by_ser_no
from ..services.security import decode_access_token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")
ADMIN_ROLES = {CredentialRole.ADMIN, CredentialRole.DBA}
def get_settings(request: Request) -> Settings:
    return request.app.state.settings
def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
def get_current_credential(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db),
                           settings: Settings = Depends(get_settings)) -> LoginCredential:
    try:
        payload = decode_access_token(token, settings=settings)
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    credential_id: Optional[str] = payload.get("sub")
    if not credential_id:
        raise HTTPException(status_code=401, detail="Invalid token payload")
    cred = db.get(LoginCredential, credential_id)
    if not cred or not cred.is_active:
        raise HTTPException(status_code=401, detail="Inactive or missing user")
    return cred
def require_admin(current: LoginCredential = Depends(get_current_credential)) -> LoginCredential:
    if current.role not in ADMIN_ROLES:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current
def current_member(db: Session, current: LoginCredential) -> Member | None:
    if current.subject_id is None:
        return None
    return get_by_ser_no(db, current.subject_id)
