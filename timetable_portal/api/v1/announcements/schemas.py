from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from timetable_portal.core.validations import (
    ANNOUNCEMENT_CONTENT_MAX,
    ANNOUNCEMENT_TITLE_MAX,
    require_text,
)


def _check_duration(v: Optional[int]) -> Optional[int]:
    if v is not None and v <= 0:
        raise ValueError("display_duration must be a positive number of seconds")
    return v


class AnnouncementCreate(BaseModel):
    title: str
    content: str
    is_active: bool = True
    display_duration: Optional[int] = Field(None, description="Seconds before auto-dismiss; null keeps it open")

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return require_text(v, "Title", ANNOUNCEMENT_TITLE_MAX)

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        return require_text(v, "Content", ANNOUNCEMENT_CONTENT_MAX)

    @field_validator("display_duration")
    @classmethod
    def check_duration(cls, v: Optional[int]) -> Optional[int]:
        return _check_duration(v)


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    is_active: Optional[bool] = None
    display_duration: Optional[int] = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Title", ANNOUNCEMENT_TITLE_MAX) if v is not None else None

    @field_validator("content")
    @classmethod
    def check_content(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Content", ANNOUNCEMENT_CONTENT_MAX) if v is not None else None

    @field_validator("display_duration")
    @classmethod
    def check_duration(cls, v: Optional[int]) -> Optional[int]:
        return _check_duration(v)


class AnnouncementResponse(BaseModel):
    id: UUID
    title: str
    content: str
    is_active: bool
    display_duration: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DurationChoice(BaseModel):
    label: str
    value: Optional[int] = None


class DurationChoicesResponse(BaseModel):
    choices: List[DurationChoice]
