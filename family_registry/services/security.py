from datetime import datetime, timedelta, timezone
from functools import lru_cache
import secrets
import string
from passlib.context import CryptContext
import jwt
from ..core.config import Settings

TEMP_PASSWORD_ALPHABET = string.ascii_letters + string.digits

@lru_cache
def pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

def hash_password(p: str, *, settings: Settings) -> str:
    # Ensure bcrypt compatibility (72-byte limit)
    p = p.encode("utf-8")[:72].decode("utf-8", errors="ignore")
    return pwd_context(settings.BCRYPT_ROUNDS).hash(p)

def verify_password(p: str, hashed: str, *, settings: Settings) -> bool:
    p = p.encode("utf-8")[:72].decode("utf-8", errors="ignore")
    return pwd_context(settings.BCRYPT_ROUNDS).verify(p, hashed)

def generate_temporary_password(*, settings: Settings, length: int | None = None) -> str:
    n = length or settings.TEMP_PASSWORD_LENGTH
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(n))

def create_access_token(sub: str, *, settings: Settings, role: str | None = None, minutes: int | None = None) -> str:
    exp_min = minutes if minutes is not None else settings.ACCESS_TOKEN_MIN
    expire = datetime.now(timezone.utc) + timedelta(minutes=exp_min)
    payload = {"sub": sub, "exp": expire}
    if role:
        payload["role"] = role
    return jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")

def decode_access_token(token: str, *, settings: Settings) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
