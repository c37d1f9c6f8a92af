import logging
from datetime import datetime, timezone
from typing import Optional, Tuple
from uuid import UUID

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.auth.models import Profile, User, UserRole
from timetable_portal.auth.schemas import (
    AdminSetupRequest,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdateResponse,
    SignUpRequest,
    SignUpResponse,
    UserInfo,
)
from timetable_portal.auth.security import create_access_token, hash_password, verify_password
from timetable_portal.core.config import settings
from timetable_portal.core.enums import AppRole
from timetable_portal.core.exceptions import ServiceError, is_unique_violation

logger = logging.getLogger(__name__)

ADMIN_MIN_PASSWORD_LENGTH = 6
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."
NOT_ADMIN_MESSAGE = "You do not have admin privileges."


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(
        select(User).where(func.lower(User.email) == _normalize_email(email))
    )
    return result.scalar_one_or_none()


async def has_role(db: AsyncSession, user_id: UUID, role: AppRole) -> bool:
    result = await db.execute(
        select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == role).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def admin_exists(db: AsyncSession) -> bool:
    result = await db.execute(select(UserRole.id).where(UserRole.role == AppRole.ADMIN).limit(1))
    return result.scalar_one_or_none() is not None


def _issue_token(user: User, is_admin: bool) -> LoginResponse:
    issued_at = datetime.now(timezone.utc)
    access_token = create_access_token(
        subject={
            "sub": str(user.id),
            "email": user.email,
            "role": AppRole.ADMIN.value if is_admin else AppRole.USER.value,
        }
    )
    return LoginResponse(
        access_token=access_token,
        user=UserInfo(id=user.id, email=user.email, is_admin=is_admin),
        issued_at=issued_at,
    )


async def _authenticate(db: AsyncSession, payload: LoginRequest) -> User:
    user = await get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Failed sign in for %s", payload.email)
        raise ServiceError(INVALID_CREDENTIALS_MESSAGE, status.HTTP_401_UNAUTHORIZED)
    return user


async def sign_up_student(db: AsyncSession, payload: SignUpRequest) -> SignUpResponse:
    # Check if roll number is already taken
    existing_profile = await db.execute(
        select(Profile.id).where(Profile.roll_number == payload.roll_number)
    )
    if existing_profile.scalar_one_or_none() is not None:
        raise ServiceError("Roll number already registered", status.HTTP_409_CONFLICT)
    if await get_user_by_email(db, payload.email):
        raise ServiceError("Email already registered", status.HTTP_409_CONFLICT)

    try:
        user = User(email=_normalize_email(payload.email), password_hash=hash_password(payload.password))
        db.add(user)
        await db.flush()  # to populate user.id
        db.add(UserRole(user_id=user.id, role=AppRole.USER))
        db.add(
            Profile(
                user_id=user.id,
                name=payload.name,
                roll_number=payload.roll_number,
                batch=payload.batch.value,
            )
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if is_unique_violation(e):
            logger.warning("Duplicate sign up for roll number %s", payload.roll_number)
            raise ServiceError("Roll number already registered", status.HTTP_409_CONFLICT) from e
        raise ServiceError("Failed to create account", status.HTTP_500_INTERNAL_SERVER_ERROR) from e

    logger.info("Created student account for roll number %s", payload.roll_number)
    return SignUpResponse(success=True, message="Account created successfully", user_id=user.id)


async def login_user(db: AsyncSession, payload: LoginRequest) -> LoginResponse:
    user = await _authenticate(db, payload)
    return _issue_token(user, await has_role(db, user.id, AppRole.ADMIN))


async def login_admin(db: AsyncSession, payload: LoginRequest) -> LoginResponse:
    user = await _authenticate(db, payload)
    if not await has_role(db, user.id, AppRole.ADMIN):
        logger.warning("Non-admin %s attempted admin sign in", user.email)
        raise ServiceError(NOT_ADMIN_MESSAGE, status.HTTP_403_FORBIDDEN)
    return _issue_token(user, True)


async def setup_admin(db: AsyncSession, payload: AdminSetupRequest) -> Tuple[User, bool]:
    """
    Bootstrap the first admin. Only the designated ADMIN_EMAIL may do this, and only
    while no admin role row exists. Returns (user, created).
    """
    if _normalize_email(payload.email) != _normalize_email(settings.admin_email):
        raise ServiceError("Please use the designated admin email.", status.HTTP_400_BAD_REQUEST)
    if len(payload.password) < ADMIN_MIN_PASSWORD_LENGTH:
        raise ServiceError("Password must be at least 6 characters.", status.HTTP_400_BAD_REQUEST)
    if await admin_exists(db):
        raise ServiceError("Admin account already exists", status.HTTP_409_CONFLICT)

    user = await get_user_by_email(db, payload.email)
    created = user is None
    try:
        if created:
            user = User(email=_normalize_email(payload.email), password_hash=hash_password(payload.password))
            db.add(user)
            await db.flush()
        db.add(UserRole(user_id=user.id, role=AppRole.ADMIN))
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ServiceError("Role assignment failed", status.HTTP_409_CONFLICT) from e

    logger.info("Bootstrapped admin account %s", user.email)
    return user, created


async def get_profile(db: AsyncSession, user_id: UUID) -> Optional[ProfileResponse]:
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    profile = result.scalar_one_or_none()
    return ProfileResponse.model_validate(profile) if profile else None


async def update_profile_batch(
    db: AsyncSession, user_id: UUID, payload: ProfileUpdate
) -> Optional[ProfileUpdateResponse]:
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    profile = result.scalar_one_or_none()
    if not profile:
        return None
    new_batch = payload.batch.value
    if _batch_value(profile.batch) == new_batch:
        return ProfileUpdateResponse(
            message=f"Your batch is already set to {new_batch}",
            profile=ProfileResponse.model_validate(profile),
        )
    profile.batch = new_batch
    await db.commit()
    await db.refresh(profile)
    logger.info("Profile %s batch changed to %s", profile.roll_number, new_batch)
    return ProfileUpdateResponse(
        message=f"Your batch has been changed to {new_batch}",
        profile=ProfileResponse.model_validate(profile),
    )


def _batch_value(batch) -> str:
    return getattr(batch, "value", batch)
