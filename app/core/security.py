from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.config import settings


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
ALGORITHM = "HS256"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(email: str, role: str, expires_minutes: Optional[int] = None) -> str:
    """Bearer token for the admin console; ``sub`` is the user's email."""
    minutes = expires_minutes if expires_minutes is not None else settings.AUTH_JWT_EXPIRE_MINUTES
    claims: dict[str, Any] = {
        "sub": email,
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(claims, settings.AUTH_JWT_SECRET, algorithm=ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    try:
        return jwt.decode(token, settings.AUTH_JWT_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        raise ValueError("invalid_token") from e
