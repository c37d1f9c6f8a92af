import logging
from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID

from fastapi import status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.core.calendar import WeekGrid, build_week_grid
from timetable_portal.core.config import settings
from timetable_portal.core.conflicts import conflict_message, find_room_conflict
from timetable_portal.core.enums import WORKING_DAYS, Batch, ClassType, Day
from timetable_portal.core.exceptions import ServiceError
from timetable_portal.core.models import Subject, Teacher, TimetableEntry
from timetable_portal.core.timeslots import format_time_slot, parse_time_to_minutes, slot_sort_key, split_time_slot

from .schemas import (
    BlockResponse,
    ConflictCheckRequest,
    ConflictCheckResponse,
    DayColumnResponse,
    TimetableEntryCreate,
    TimetableEntryResponse,
    TimetableEntryUpdate,
    WeekGridResponse,
)

logger = logging.getLogger(__name__)

INVALID_DAY_MESSAGE = "Only Tuesday through Saturday are valid working days"


def _to_response(e: TimetableEntry) -> TimetableEntryResponse:
    return TimetableEntryResponse.model_validate(e)


def _entry_sort_key(e: TimetableEntry):
    day = getattr(e.day, "value", e.day)
    day_index = WORKING_DAYS.index(day) if day in WORKING_DAYS else len(WORKING_DAYS)
    return (day_index, slot_sort_key(e.time_slot))


def _check_day(day: str) -> Day:
    if day not in WORKING_DAYS:
        raise ServiceError(INVALID_DAY_MESSAGE, status.HTTP_400_BAD_REQUEST)
    return Day(day)


def _compose_slot(start_time: str, end_time: str) -> str:
    if parse_time_to_minutes(end_time) <= parse_time_to_minutes(start_time):
        raise ServiceError("End time must be after start time", status.HTTP_400_BAD_REQUEST)
    return format_time_slot(start_time, end_time)


async def _load_subject(db: AsyncSession, subject_id: UUID) -> Subject:
    subject = await db.get(Subject, subject_id)
    if not subject:
        raise ServiceError("Invalid subject", status.HTTP_400_BAD_REQUEST)
    return subject


async def _load_teacher(db: AsyncSession, teacher_id: Optional[UUID]) -> Optional[Teacher]:
    if teacher_id is None:
        return None
    teacher = await db.get(Teacher, teacher_id)
    if not teacher:
        raise ServiceError("Invalid teacher", status.HTTP_400_BAD_REQUEST)
    return teacher


async def _find_conflict(
    db: AsyncSession,
    day: Day,
    time_slot: str,
    room_number: str,
    exclude_id: Optional[UUID] = None,
) -> Optional[TimetableEntry]:
    result = await db.execute(
        select(TimetableEntry).where(TimetableEntry.day == day, TimetableEntry.room_number == room_number)
    )
    return find_room_conflict(result.scalars().all(), day, time_slot, room_number, exclude_id=exclude_id)


async def _ensure_room_free(
    db: AsyncSession,
    day: Day,
    time_slot: str,
    room_number: str,
    exclude_id: Optional[UUID] = None,
) -> None:
    existing = await _find_conflict(db, day, time_slot, room_number, exclude_id)
    if existing:
        logger.info("Room %s already booked on %s %s", room_number, day.value, time_slot)
        raise ServiceError(conflict_message(room_number, existing), status.HTTP_409_CONFLICT)


async def create_entry(db: AsyncSession, payload: TimetableEntryCreate) -> TimetableEntryResponse:
    day = _check_day(payload.day)
    subject = await _load_subject(db, payload.subject_id)
    teacher = await _load_teacher(db, payload.teacher_id)
    time_slot = _compose_slot(payload.start_time, payload.end_time)
    await _ensure_room_free(db, day, time_slot, payload.room_number)

    obj = TimetableEntry(
        day=day,
        time_slot=time_slot,
        course_code=subject.code,
        subject_name=subject.name,
        class_type=payload.class_type,
        batch=payload.batch,
        room_number=payload.room_number,
        staff_name=teacher.display_name if teacher else None,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("Scheduled %s on %s %s in %s", obj.course_code, day.value, time_slot, obj.room_number)
    return _to_response(obj)


async def list_entries(
    db: AsyncSession,
    day: Optional[Day] = None,
    class_type: Optional[ClassType] = None,
    batch: Optional[Batch] = None,
    q: Optional[str] = None,
) -> List[TimetableEntryResponse]:
    stmt = select(TimetableEntry)
    if day is not None:
        stmt = stmt.where(TimetableEntry.day == day)
    if class_type is not None:
        stmt = stmt.where(TimetableEntry.class_type == class_type)
    if batch is not None:
        stmt = stmt.where(TimetableEntry.batch == batch)
    if q and q.strip():
        pattern = f"%{q.strip().lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(TimetableEntry.subject_name).like(pattern),
                func.lower(TimetableEntry.course_code).like(pattern),
                func.lower(TimetableEntry.staff_name).like(pattern),
            )
        )
    result = await db.execute(stmt)
    return [_to_response(e) for e in sorted(result.scalars().all(), key=_entry_sort_key)]


async def list_all_entries(db: AsyncSession) -> List[TimetableEntry]:
    result = await db.execute(select(TimetableEntry))
    return sorted(result.scalars().all(), key=_entry_sort_key)


async def get_entry(db: AsyncSession, entry_id: UUID) -> Optional[TimetableEntryResponse]:
    obj = await db.get(TimetableEntry, entry_id)
    return _to_response(obj) if obj else None


def _current_times(obj: TimetableEntry) -> Tuple[Optional[str], Optional[str]]:
    # Legacy free-text slots ("9am - 10am") count as missing
    try:
        start, end = split_time_slot(obj.time_slot)
        parse_time_to_minutes(start)
        parse_time_to_minutes(end)
    except ValueError:
        return None, None
    return start, end


async def update_entry(
    db: AsyncSession,
    entry_id: UUID,
    payload: TimetableEntryUpdate,
) -> Optional[TimetableEntryResponse]:
    obj = await db.get(TimetableEntry, entry_id)
    if not obj:
        return None

    # Resolve and validate everything before touching the row
    values = {}
    if payload.day is not None:
        values["day"] = _check_day(payload.day)
    if payload.subject_id is not None:
        subject = await _load_subject(db, payload.subject_id)
        values["course_code"] = subject.code
        values["subject_name"] = subject.name
    if "teacher_id" in payload.model_fields_set:
        teacher = await _load_teacher(db, payload.teacher_id)
        values["staff_name"] = teacher.display_name if teacher else None
    if payload.start_time is not None or payload.end_time is not None:
        current_start, current_end = _current_times(obj)
        start_time = payload.start_time or current_start
        end_time = payload.end_time or current_end
        if not start_time or not end_time:
            raise ServiceError("Both start and end time are required", status.HTTP_400_BAD_REQUEST)
        values["time_slot"] = _compose_slot(start_time, end_time)
    if payload.class_type is not None:
        values["class_type"] = payload.class_type
    if payload.batch is not None:
        values["batch"] = payload.batch
    if payload.room_number is not None:
        values["room_number"] = payload.room_number

    day = values.get("day", obj.day)
    await _ensure_room_free(
        db,
        day if isinstance(day, Day) else Day(day),
        values.get("time_slot", obj.time_slot),
        values.get("room_number", obj.room_number),
        exclude_id=obj.id,
    )

    for field, value in values.items():
        setattr(obj, field, value)
    await db.commit()
    await db.refresh(obj)
    logger.info("Updated timetable entry %s", obj.id)
    return _to_response(obj)


async def delete_entry(db: AsyncSession, entry_id: UUID) -> bool:
    obj = await db.get(TimetableEntry, entry_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted timetable entry %s (%s)", entry_id, obj.course_code)
    return True


async def check_conflict(db: AsyncSession, payload: ConflictCheckRequest) -> ConflictCheckResponse:
    day = _check_day(payload.day)
    time_slot = _compose_slot(payload.start_time, payload.end_time)
    existing = await _find_conflict(db, day, time_slot, payload.room_number, payload.exclude_id)
    if not existing:
        return ConflictCheckResponse(conflict=False)
    return ConflictCheckResponse(
        conflict=True,
        message=conflict_message(payload.room_number, existing),
        conflicting_entry_id=existing.id,
    )


def grid_to_response(grid: WeekGrid) -> WeekGridResponse:
    return WeekGridResponse(
        hour_labels=grid.hour_labels,
        hour_height=grid.hour_height,
        days=[
            DayColumnResponse(
                day=column.day,
                short_day=column.short_day,
                is_today=column.is_today,
                is_holiday=column.is_holiday,
                blocks=[
                    BlockResponse(
                        entry=_to_response(block.entry),
                        top=block.layout.top,
                        height=block.layout.height,
                        compact=block.layout.compact,
                    )
                    for block in column.blocks
                ],
            )
            for column in grid.days
        ],
    )


async def get_admin_grid(db: AsyncSession, today: date) -> WeekGridResponse:
    entries = await list_all_entries(db)
    grid = build_week_grid(
        entries,
        today,
        start_hour=settings.grid_start_hour,
        end_hour=settings.grid_end_hour,
        hour_height=settings.admin_grid_hour_height,
        min_height=settings.admin_grid_min_block_height,
        compact_below=settings.admin_grid_compact_height,
    )
    return grid_to_response(grid)
