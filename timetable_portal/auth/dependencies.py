from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer, OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.auth.models import User
from timetable_portal.auth.schemas import CurrentUser, StudentSession
from timetable_portal.auth.security import ACCESS_TOKEN_TYPE, STUDENT_TOKEN_TYPE, decode_token
from timetable_portal.auth.services import has_role
from timetable_portal.core.enums import AppRole
from timetable_portal.core.validations import is_valid_roll_number
from timetable_portal.db.session import get_db


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login-oauth")
student_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """Resolve the signed-in account from the access token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(token)
    except JWTError:
        raise credentials_exception

    if payload.get("typ") != ACCESS_TOKEN_TYPE:
        raise credentials_exception
    user_id_str = payload.get("sub")
    if not user_id_str:
        raise credentials_exception
    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise credentials_exception

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise credentials_exception

    # Admin status is looked up on every request, not trusted from the token
    return CurrentUser(
        id=user.id,
        email=user.email,
        is_admin=await has_role(db, user.id, AppRole.ADMIN),
    )


async def get_student_session(
    credentials: HTTPAuthorizationCredentials = Depends(student_bearer),
) -> StudentSession:
    """
    Load the roll-number session. A token whose roll number no longer passes
    validation is rejected, so the client drops it and restarts the entry flow.
    """
    session_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Student session missing or invalid",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise session_exception
    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise session_exception

    if payload.get("typ") != STUDENT_TOKEN_TYPE:
        raise session_exception
    roll_number = payload.get("sub")
    name = payload.get("name")
    if not name or not is_valid_roll_number(roll_number):
        raise session_exception
    return StudentSession(name=name, roll_number=roll_number)
