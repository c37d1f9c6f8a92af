from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import bcrypt
from jose import jwt

from timetable_portal.core.config import settings

ACCESS_TOKEN_TYPE = "access"
STUDENT_TOKEN_TYPE = "student"


def hash_password(plain_password: str) -> str:
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(plain_password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # In case the stored hash is invalid/corrupted
        return False


def _encode(subject: Dict, expire: datetime) -> str:
    to_encode = subject.copy()
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(
    *, subject: Dict, expires_minutes: Optional[int] = None
) -> str:
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return _encode({**subject, "typ": ACCESS_TOKEN_TYPE}, expire)


def create_student_token(
    *, name: str, roll_number: str, expires_days: Optional[int] = None
) -> str:
    """Signed stand-in for the browser-stored {name, rollNumber} session."""
    if expires_days is None:
        expires_days = settings.student_session_expire_days
    expire = datetime.now(timezone.utc) + timedelta(days=expires_days)
    return _encode({"sub": roll_number, "name": name, "typ": STUDENT_TOKEN_TYPE}, expire)


def decode_token(token: str) -> Dict:
    """Raises jose.JWTError on a bad signature or expired token."""
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
