import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.core.enums import TeacherStatus
from timetable_portal.core.models import Teacher, TimetableEntry

from .schemas import TeacherCreate, TeacherResponse, TeacherUpdate

logger = logging.getLogger(__name__)


def _to_response(t: Teacher) -> TeacherResponse:
    return TeacherResponse.model_validate(t)


async def create_teacher(db: AsyncSession, payload: TeacherCreate) -> TeacherResponse:
    obj = Teacher(
        title=payload.title,
        name=payload.name,
        department=payload.department,
        status=payload.status.value,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("Created teacher %s", obj.display_name)
    return _to_response(obj)


async def list_teachers(
    db: AsyncSession,
    q: Optional[str] = None,
    status_filter: Optional[TeacherStatus] = None,
) -> List[TeacherResponse]:
    stmt = select(Teacher)
    if q and q.strip():
        pattern = f"%{q.strip().lower()}%"
        stmt = stmt.where(
            or_(
                func.lower(Teacher.name).like(pattern),
                func.lower(Teacher.department).like(pattern),
            )
        )
    if status_filter is not None:
        stmt = stmt.where(Teacher.status == status_filter.value)
    stmt = stmt.order_by(Teacher.name)
    result = await db.execute(stmt)
    return [_to_response(t) for t in result.scalars().all()]


async def get_teacher_by_id(db: AsyncSession, teacher_id: UUID) -> Optional[Teacher]:
    return await db.get(Teacher, teacher_id)


async def get_teacher(db: AsyncSession, teacher_id: UUID) -> Optional[TeacherResponse]:
    obj = await get_teacher_by_id(db, teacher_id)
    return _to_response(obj) if obj else None


async def update_teacher(
    db: AsyncSession,
    teacher_id: UUID,
    payload: TeacherUpdate,
) -> Optional[TeacherResponse]:
    obj = await get_teacher_by_id(db, teacher_id)
    if not obj:
        return None
    old_display_name = obj.display_name
    if payload.title is not None:
        obj.title = payload.title
    if payload.name is not None:
        obj.name = payload.name
    if "department" in payload.model_fields_set:
        obj.department = (payload.department or "").strip() or None
    if payload.status is not None:
        obj.status = payload.status.value

    if obj.display_name != old_display_name:
        # staff_name on timetable rows is a "Title Name" copy
        await db.execute(
            update(TimetableEntry)
            .where(TimetableEntry.staff_name == old_display_name)
            .values(staff_name=obj.display_name)
        )
    await db.commit()
    await db.refresh(obj)
    logger.info("Updated teacher %s", obj.display_name)
    return _to_response(obj)


async def delete_teacher(db: AsyncSession, teacher_id: UUID) -> bool:
    obj = await get_teacher_by_id(db, teacher_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted teacher %s", obj.display_name)
    return True
