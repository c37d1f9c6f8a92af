from typing import Dict, List, Optional

from pydantic import BaseModel, field_validator

from timetable_portal.api.v1.announcements.schemas import AnnouncementResponse
from timetable_portal.api.v1.timetables.schemas import TimetableEntryResponse
from timetable_portal.auth.schemas import StudentSession
from timetable_portal.core.enums import StudentBatch
from timetable_portal.core.validations import validate_roll_number, validate_student_name


class StudentSessionCreate(BaseModel):
    name: str
    roll_number: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return validate_student_name(v)

    @field_validator("roll_number")
    @classmethod
    def check_roll_number(cls, v: str) -> str:
        return validate_roll_number(v)


class StudentSessionResponse(BaseModel):
    session_token: str
    token_type: str = "bearer"
    student: StudentSession


class BatchPreferenceResponse(BaseModel):
    course_code: str
    batch: StudentBatch


class ConfigurableCourse(BaseModel):
    course_code: str
    name: Optional[str] = None
    batch: StudentBatch = StudentBatch.B1


class StudentBatchesResponse(BaseModel):
    preferences: List[BatchPreferenceResponse]
    courses: List[ConfigurableCourse]


class BatchPreferenceUpdate(BaseModel):
    batch: StudentBatch


class BulkBatchUpdate(BaseModel):
    """Batch selection form submit: {"batches": {"CD23631": "B2", ...}}."""

    batches: Dict[str, StudentBatch]


class StudentTimetableResponse(BaseModel):
    day: Optional[str] = None
    entries: List[TimetableEntryResponse]
    theory_count: int
    lab_count: int


class TodaySummaryResponse(BaseModel):
    day: str
    is_holiday: bool
    entries: List[TimetableEntryResponse]
    theory_count: int
    lab_count: int


class DayScheduleResponse(BaseModel):
    day: str
    entries: List[TimetableEntryResponse]
    count: int


class DashboardResponse(BaseModel):
    student: StudentSession
    active_day: str
    theory_count: int
    lab_count: int
    today: TodaySummaryResponse
    days: List[DayScheduleResponse]
    announcements: List[AnnouncementResponse]
