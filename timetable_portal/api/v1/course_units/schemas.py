from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from timetable_portal.core.validations import blank_to_none, require_text


class CourseUnitCreate(BaseModel):
    unit_number: int = Field(1, ge=1)
    unit_name: str = Field(..., max_length=255)
    syllabus: Optional[str] = None

    @field_validator("unit_name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return require_text(v, "Unit name")

    @field_validator("syllabus")
    @classmethod
    def strip_syllabus(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class CourseUnitUpdate(BaseModel):
    unit_number: Optional[int] = Field(None, ge=1)
    unit_name: Optional[str] = Field(None, max_length=255)
    syllabus: Optional[str] = None

    @field_validator("unit_name")
    @classmethod
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Unit name") if v is not None else None

    @field_validator("syllabus")
    @classmethod
    def strip_syllabus(cls, v: Optional[str]) -> Optional[str]:
        return blank_to_none(v)


class CourseUnitResponse(BaseModel):
    id: UUID
    subject_id: UUID
    unit_number: int
    unit_name: str
    syllabus: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SyllabusImportResponse(BaseModel):
    subject_id: UUID
    imported: int
    message: str
