from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from timetable_portal.core.validations import blank_to_none, require_text


class SubjectCreate(BaseModel):
    code: str = Field(..., max_length=50)
    name: str = Field(..., max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    credit_hours: Optional[int] = Field(None, ge=0)
    split_students: bool = False
    num_batches: Optional[int] = Field(None, ge=1)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        return require_text(v, "Subject code").upper()

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return require_text(v, "Subject name")

    @field_validator("department", mode="before")
    @classmethod
    def normalize_department(cls, v):
        return blank_to_none(v)


class SubjectUpdate(BaseModel):
    code: Optional[str] = Field(None, max_length=50)
    name: Optional[str] = Field(None, max_length=255)
    department: Optional[str] = Field(None, max_length=255)
    credit_hours: Optional[int] = Field(None, ge=0)
    split_students: Optional[bool] = None
    num_batches: Optional[int] = Field(None, ge=1)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Subject code").upper() if v is not None else None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Subject name") if v is not None else None


class SubjectResponse(BaseModel):
    id: UUID
    code: str
    name: str
    department: Optional[str] = None
    credit_hours: Optional[int] = None
    split_students: bool
    num_batches: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SubjectDropdownItem(BaseModel):
    label: str
    value: UUID
