from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from timetable_portal.core.enums import Batch, ClassType, Day
from timetable_portal.core.timeslots import format_display_time, split_time_slot, time_to_str
from timetable_portal.core.validations import require_text


def _parse_time_24(v) -> Optional[str]:
    """Accept 'H:MM', 'HH:MM' or a time object; return zero-padded 'HH:MM'."""
    if v is None:
        return None
    try:
        if not isinstance(v, str) and not hasattr(v, "strftime"):
            raise ValueError(v)
        return time_to_str(v)
    except ValueError:
        raise ValueError("start_time/end_time must be 24-hour string (e.g. 09:00, 13:20)")


class TimetableEntryCreate(BaseModel):
    subject_id: UUID
    teacher_id: Optional[UUID] = None
    day: str = Field(..., description="Tuesday .. Saturday")
    start_time: str = Field("09:00", description="24-hour format, e.g. 09:00")
    end_time: str = Field("10:00", description="24-hour format, e.g. 10:00")
    class_type: ClassType = ClassType.THEORY
    batch: Batch = Batch.ALL
    room_number: str = Field(..., max_length=50)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v: Union[str, object]) -> str:
        return _parse_time_24(v)

    @field_validator("room_number")
    @classmethod
    def check_room(cls, v: str) -> str:
        return require_text(v, "Room number")

    @field_validator("day")
    @classmethod
    def strip_day(cls, v: str) -> str:
        return v.strip()


class TimetableEntryUpdate(BaseModel):
    subject_id: Optional[UUID] = None
    # Send null explicitly to clear the staff name
    teacher_id: Optional[UUID] = None
    day: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    class_type: Optional[ClassType] = None
    batch: Optional[Batch] = None
    room_number: Optional[str] = Field(None, max_length=50)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v):
        return _parse_time_24(v)

    @field_validator("room_number")
    @classmethod
    def check_room(cls, v: Optional[str]) -> Optional[str]:
        return require_text(v, "Room number") if v is not None else None


class TimetableEntryResponse(BaseModel):
    id: UUID
    day: Day
    time_slot: str
    course_code: str
    subject_name: str
    class_type: ClassType
    batch: Batch
    room_number: str
    staff_name: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    # 12-hour label, e.g. "9:00 AM - 10:00 AM"
    display_time: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @model_validator(mode="after")
    def fill_times(self) -> "TimetableEntryResponse":
        # Rows with an unparseable slot keep only the raw time_slot text
        try:
            start, end = split_time_slot(self.time_slot)
            self.display_time = f"{format_display_time(start)} - {format_display_time(end)}"
        except ValueError:
            return self
        self.start_time, self.end_time = start, end
        return self


class ConflictCheckRequest(BaseModel):
    day: str
    start_time: str
    end_time: str
    room_number: str
    exclude_id: Optional[UUID] = Field(None, description="Entry being edited")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time(cls, v):
        return _parse_time_24(v)

    @field_validator("room_number")
    @classmethod
    def check_room(cls, v: str) -> str:
        return require_text(v, "Room number")


class ConflictCheckResponse(BaseModel):
    conflict: bool
    message: Optional[str] = None
    conflicting_entry_id: Optional[UUID] = None


class BlockResponse(BaseModel):
    entry: TimetableEntryResponse
    top: float
    height: float
    compact: bool


class DayColumnResponse(BaseModel):
    day: str
    short_day: str
    is_today: bool
    is_holiday: bool
    blocks: List[BlockResponse]


class WeekGridResponse(BaseModel):
    hour_labels: List[str]
    hour_height: float
    days: List[DayColumnResponse]
