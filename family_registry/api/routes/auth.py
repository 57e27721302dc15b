from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
import logging
from ...core.config import Settings
from ...core.errors import AccountLocked, ConflictError, ValidationError
from ...models.credential import LoginCredential
from ...schemas.auth import TokenOut, CredentialOut, RegisterIn
from ...services.credential_service import authenticate, register as register_credential
from ...services.security import create_access_token
from ..deps import get_db, get_current_credential, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/register", response_model=TokenOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterIn, db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    try:
        cred = register_credential(db, settings=settings, email=payload.email, password=payload.password,
                                   confirm_password=payload.confirm_password)
    except ConflictError as e:
        raise HTTPException(status.HTTP_409_CONFLICT, e.message)
    except ValidationError as e:
        raise HTTPException(400, e.message)
    access = create_access_token(cred.id, settings=settings, role=cred.role.value)
    return TokenOut(access_token=access)

@router.post("/token", response_model=TokenOut)
def token(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db),
          settings: Settings = Depends(get_settings)):
    try:
        cred = authenticate(db, username=form.username, password=form.password, settings=settings)
    except AccountLocked as e:
        raise HTTPException(status_code=status.HTTP_423_LOCKED, detail=e.message)
    if not cred:
        logger.info(f"Login failed for {form.username.strip().lower()}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect credentials")
    access = create_access_token(cred.id, settings=settings, role=cred.role.value)
    return TokenOut(access_token=access)

@router.get("/me", response_model=CredentialOut)
def me(current: LoginCredential = Depends(get_current_credential)):
    return current
