from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from timetable_portal.core.enums import Batch, StudentBatch
from timetable_portal.core.validations import validate_roll_number, validate_student_name


class SignUpRequest(BaseModel):
    name: str
    roll_number: str
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    batch: StudentBatch = StudentBatch.B1

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_student_name(v)

    @field_validator("roll_number")
    @classmethod
    def check_roll_number(cls, v: str) -> str:
        return validate_roll_number(v)


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=100)


class AdminSetupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., max_length=100)


class UserInfo(BaseModel):
    id: UUID
    email: EmailStr
    is_admin: bool = False


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserInfo
    issued_at: datetime


class SignUpResponse(BaseModel):
    success: bool
    message: str
    user_id: UUID


class AdminStatusResponse(BaseModel):
    admin_exists: bool


class ProfileResponse(BaseModel):
    id: UUID
    user_id: UUID
    name: str
    roll_number: str
    batch: Batch
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    batch: StudentBatch


class ProfileUpdateResponse(BaseModel):
    message: str
    profile: ProfileResponse


class CurrentUser(BaseModel):
    """Authenticated account resolved from the access token."""

    id: UUID
    email: str
    is_admin: bool = False


class StudentSession(BaseModel):
    """
    Identity of a student using the roll-number entry flow.
    Loaded from the student token on every request; nothing is stored server side.
    """

    name: str
    roll_number: str
