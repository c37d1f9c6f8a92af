import logging
from typing import List, Optional
from uuid import UUID

from fastapi import status
from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.core.exceptions import ServiceError, is_unique_violation
from timetable_portal.core.models import Subject, SubjectBatchPreference, TimetableEntry

from .schemas import SubjectCreate, SubjectDropdownItem, SubjectResponse, SubjectUpdate

logger = logging.getLogger(__name__)

DUPLICATE_CODE_MESSAGE = "Subject code already exists"


def _to_response(s: Subject) -> SubjectResponse:
    return SubjectResponse.model_validate(s)


async def _find_by_code(
    db: AsyncSession,
    code: str,
    exclude_subject_id: Optional[UUID] = None,
) -> Optional[Subject]:
    stmt = select(Subject).where(Subject.code == code)
    if exclude_subject_id is not None:
        stmt = stmt.where(Subject.id != exclude_subject_id)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def create_subject(db: AsyncSession, payload: SubjectCreate) -> SubjectResponse:
    if await _find_by_code(db, payload.code):
        raise ServiceError(DUPLICATE_CODE_MESSAGE, status.HTTP_409_CONFLICT)
    try:
        obj = Subject(
            code=payload.code,
            name=payload.name,
            department=payload.department,
            credit_hours=payload.credit_hours,
            split_students=payload.split_students,
            num_batches=payload.num_batches,
        )
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
    except IntegrityError as e:
        await db.rollback()
        if is_unique_violation(e):
            logger.warning("Duplicate subject code %s", payload.code)
            raise ServiceError(DUPLICATE_CODE_MESSAGE, status.HTTP_409_CONFLICT) from e
        raise ServiceError("Error creating subject", status.HTTP_400_BAD_REQUEST) from e
    logger.info("Created subject %s", obj.code)
    return _to_response(obj)


async def list_subjects(db: AsyncSession, q: Optional[str] = None) -> List[SubjectResponse]:
    stmt = select(Subject)
    if q and q.strip():
        pattern = f"%{q.strip().lower()}%"
        stmt = stmt.where(or_(func.lower(Subject.name).like(pattern), func.lower(Subject.code).like(pattern)))
    stmt = stmt.order_by(Subject.code)
    result = await db.execute(stmt)
    return [_to_response(s) for s in result.scalars().all()]


async def get_subject_by_id(db: AsyncSession, subject_id: UUID) -> Optional[Subject]:
    return await db.get(Subject, subject_id)


async def get_subject(db: AsyncSession, subject_id: UUID) -> Optional[SubjectResponse]:
    obj = await get_subject_by_id(db, subject_id)
    return _to_response(obj) if obj else None


async def get_subject_by_code(db: AsyncSession, code: str) -> Optional[Subject]:
    return await _find_by_code(db, code.strip().upper())


async def update_subject(
    db: AsyncSession,
    subject_id: UUID,
    payload: SubjectUpdate,
) -> Optional[SubjectResponse]:
    obj = await get_subject_by_id(db, subject_id)
    if not obj:
        return None
    old_code, old_name = obj.code, obj.name
    if payload.code is not None:
        if await _find_by_code(db, payload.code, exclude_subject_id=subject_id):
            raise ServiceError(DUPLICATE_CODE_MESSAGE, status.HTTP_409_CONFLICT)
        obj.code = payload.code
    if payload.name is not None:
        obj.name = payload.name
    if "department" in payload.model_fields_set:
        obj.department = (payload.department or "").strip() or None
    if "credit_hours" in payload.model_fields_set:
        obj.credit_hours = payload.credit_hours
    if payload.split_students is not None:
        obj.split_students = payload.split_students
    if "num_batches" in payload.model_fields_set:
        obj.num_batches = payload.num_batches

    if obj.code != old_code or obj.name != old_name:
        # Timetable rows carry copies of code and name; keep them in step
        await db.execute(
            update(TimetableEntry)
            .where(TimetableEntry.course_code == old_code)
            .values(course_code=obj.code, subject_name=obj.name)
        )
    if obj.code != old_code:
        # Saved lab batches follow the course to its new code; a student who already
        # has a choice under the new code keeps that one
        taken = select(SubjectBatchPreference.roll_number).where(SubjectBatchPreference.course_code == obj.code)
        await db.execute(
            update(SubjectBatchPreference)
            .where(
                SubjectBatchPreference.course_code == old_code,
                SubjectBatchPreference.roll_number.not_in(taken),
            )
            .values(course_code=obj.code)
        )
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError as e:
        await db.rollback()
        if is_unique_violation(e):
            raise ServiceError(DUPLICATE_CODE_MESSAGE, status.HTTP_409_CONFLICT) from e
        raise ServiceError("Error updating subject", status.HTTP_400_BAD_REQUEST) from e
    logger.info("Updated subject %s", obj.code)
    return _to_response(obj)


async def delete_subject(db: AsyncSession, subject_id: UUID) -> bool:
    obj = await get_subject_by_id(db, subject_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted subject %s", obj.code)
    return True


async def get_subject_dropdown(db: AsyncSession) -> List[SubjectDropdownItem]:
    subjects = await list_subjects(db)
    return [SubjectDropdownItem(label=f"{s.code} - {s.name}", value=s.id) for s in subjects]
