from datetime import datetime
from pydantic import BaseModel, EmailStr
from .common import ORMModel
class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
class RegisterIn(BaseModel):
    email: EmailStr
    password: str
    confirm_password: str
class CredentialOut(ORMModel):
    id: str
    subject_id: int | None = None
    username: str
    email: str | None = None
    role: str
    is_active: bool
    last_login: datetime | None = None
    failed_attempts: int = 0
    lock_until: datetime | None = None
class ResetPasswordIn(BaseModel):
    new_password: str
