"""
Student-facing reads: the timetable filtered by the student's lab batches, plus
the batch preferences themselves.

A student sees every Theory entry, every entry held for ALL, and only the Lab
entries for the batch they picked for that course (B1 until they pick).
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.api.v1.announcements.service import list_active_announcements
from timetable_portal.api.v1.timetables.schemas import TimetableEntryResponse, WeekGridResponse
from timetable_portal.api.v1.timetables.service import grid_to_response, list_all_entries
from timetable_portal.auth.schemas import StudentSession
from timetable_portal.core.calendar import (
    build_day_schedule,
    build_today_summary,
    build_week_grid,
    count_by_type,
    default_active_day,
    sort_by_start,
)
from timetable_portal.core.config import settings
from timetable_portal.core.enums import WORKING_DAYS, Batch, ClassType, Day, StudentBatch
from timetable_portal.core.exceptions import ServiceError
from timetable_portal.core.models import Subject, SubjectBatchPreference

from .schemas import (
    BatchPreferenceResponse,
    ConfigurableCourse,
    DashboardResponse,
    DayScheduleResponse,
    StudentBatchesResponse,
    StudentTimetableResponse,
    TodaySummaryResponse,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH = StudentBatch.B1


def _value(v):
    return getattr(v, "value", v)


def get_subject_batch(prefs: Mapping[str, str], course_code: str) -> str:
    return _value(prefs.get(course_code)) or DEFAULT_BATCH.value


def filter_entries_for_student(entries: Iterable, prefs: Mapping[str, str]) -> List[object]:
    visible = []
    for entry in entries:
        if _value(entry.class_type) == ClassType.THEORY.value or _value(entry.batch) == Batch.ALL.value:
            visible.append(entry)
        elif _value(entry.batch) == get_subject_batch(prefs, entry.course_code):
            visible.append(entry)
    return visible


async def get_preferences(db: AsyncSession, roll_number: str) -> Dict[str, str]:
    result = await db.execute(
        select(SubjectBatchPreference).where(SubjectBatchPreference.roll_number == roll_number)
    )
    return {p.course_code: _value(p.batch) for p in result.scalars().all()}


async def _split_subjects(db: AsyncSession) -> Dict[str, Optional[str]]:
    """Course code -> subject name for every batch-configurable course."""
    courses: Dict[str, Optional[str]] = {code: None for code in settings.batch_configurable_courses}
    result = await db.execute(select(Subject))
    for subject in result.scalars().all():
        if subject.code in courses or subject.split_students:
            courses[subject.code] = subject.name
    return courses


async def list_batches(db: AsyncSession, roll_number: str) -> StudentBatchesResponse:
    prefs = await get_preferences(db, roll_number)
    courses = await _split_subjects(db)
    return StudentBatchesResponse(
        preferences=[
            BatchPreferenceResponse(course_code=code, batch=batch) for code, batch in sorted(prefs.items())
        ],
        courses=[
            ConfigurableCourse(course_code=code, name=name, batch=get_subject_batch(prefs, code))
            for code, name in sorted(courses.items())
        ],
    )


async def _upsert_preference(
    db: AsyncSession,
    roll_number: str,
    course_code: str,
    batch: StudentBatch,
) -> None:
    result = await db.execute(
        select(SubjectBatchPreference).where(
            SubjectBatchPreference.roll_number == roll_number,
            SubjectBatchPreference.course_code == course_code,
        )
    )
    pref = result.scalar_one_or_none()
    if pref:
        pref.batch = Batch(batch.value)
    else:
        db.add(SubjectBatchPreference(roll_number=roll_number, course_code=course_code, batch=Batch(batch.value)))


async def update_batches(
    db: AsyncSession,
    roll_number: str,
    batches: Mapping[str, StudentBatch],
) -> StudentBatchesResponse:
    courses = await _split_subjects(db)
    normalized = {code.strip().upper(): batch for code, batch in batches.items()}
    for code in normalized:
        if code not in courses:
            raise ServiceError(
                f"Course {code} does not have batch-specific lab sessions",
                status.HTTP_400_BAD_REQUEST,
            )
    for code, batch in normalized.items():
        await _upsert_preference(db, roll_number, code, batch)
    try:
        await db.commit()
    except IntegrityError as e:
        # Concurrent first write for the same (roll_number, course_code)
        await db.rollback()
        raise ServiceError("Batch preference changed concurrently, please retry", status.HTTP_409_CONFLICT) from e
    logger.info("Roll number %s set batches %s", roll_number, {c: b.value for c, b in normalized.items()})
    return await list_batches(db, roll_number)


async def _student_entries(db: AsyncSession, roll_number: str) -> List[object]:
    prefs = await get_preferences(db, roll_number)
    return filter_entries_for_student(await list_all_entries(db), prefs)


def _responses(entries: Iterable) -> List[TimetableEntryResponse]:
    return [TimetableEntryResponse.model_validate(e) for e in entries]


async def get_timetable(
    db: AsyncSession,
    roll_number: str,
    day: Optional[Day] = None,
) -> StudentTimetableResponse:
    entries = await _student_entries(db, roll_number)
    if day is not None:
        entries = build_day_schedule(day.value, entries).entries
    theory, lab = count_by_type(entries)
    return StudentTimetableResponse(
        day=day.value if day else None,
        entries=_responses(entries),
        theory_count=theory,
        lab_count=lab,
    )


async def get_calendar(db: AsyncSession, roll_number: str, today: date) -> WeekGridResponse:
    entries = await _student_entries(db, roll_number)
    grid = build_week_grid(
        entries,
        today,
        start_hour=settings.grid_start_hour,
        end_hour=settings.grid_end_hour,
        hour_height=settings.grid_hour_height,
        min_height=settings.grid_min_block_height,
        compact_below=settings.grid_compact_height,
    )
    return grid_to_response(grid)


def _today_response(entries: Iterable, today: date) -> TodaySummaryResponse:
    summary = build_today_summary(entries, today)
    return TodaySummaryResponse(
        day=summary.day,
        is_holiday=summary.is_holiday,
        entries=_responses(summary.entries),
        theory_count=summary.theory_count,
        lab_count=summary.lab_count,
    )


async def get_today(db: AsyncSession, roll_number: str, today: date) -> TodaySummaryResponse:
    return _today_response(await _student_entries(db, roll_number), today)


def _schedule_response(day: str, entries: Iterable) -> DayScheduleResponse:
    schedule = build_day_schedule(day, entries)
    return DayScheduleResponse(day=schedule.day, entries=_responses(schedule.entries), count=schedule.count)


async def get_dashboard(db: AsyncSession, student: StudentSession, today: date) -> DashboardResponse:
    entries = sort_by_start(await _student_entries(db, student.roll_number))
    theory, lab = count_by_type(entries)
    return DashboardResponse(
        student=student,
        active_day=default_active_day(today),
        theory_count=theory,
        lab_count=lab,
        today=_today_response(entries, today),
        days=[_schedule_response(day, entries) for day in WORKING_DAYS],
        announcements=await list_active_announcements(db),
    )
