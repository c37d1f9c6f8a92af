from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from timetable_portal.core.enums import TeacherStatus
from timetable_portal.core.validations import blank_to_none, require_text


class TeacherCreate(BaseModel):
    title: str = Field("Mr.", max_length=20)
    name: str = Field(..., max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    status: TeacherStatus = TeacherStatus.ACTIVE

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v: str) -> str:
        return require_text(v, "Title")

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return require_text(v, "Teacher name")

    @field_validator("department", mode="before")
    @classmethod
    def normalize_department(cls, v):
        return blank_to_none(v)


class TeacherUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=20)
    name: Optional[str] = Field(None, max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    status: Optional[TeacherStatus] = None

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Title") if v is not None else None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Teacher name") if v is not None else None


class TeacherResponse(BaseModel):
    id: UUID
    title: str
    name: str
    department: Optional[str] = None
    status: TeacherStatus
    display_name: str = Field(..., description='"Title Name" as copied onto timetable rows')
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
