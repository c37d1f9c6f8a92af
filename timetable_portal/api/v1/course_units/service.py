"""
Syllabus units per subject, plus the JSON syllabus import.

Import document shape:

    {
      "course": {"course_name": "...", "course_code": "AI23331"},
      "units": [{"unit_number": "UNIT-I", "unit_title": "...", "topics": ["...", "..."]}]
    }

Import replaces every unit of the resolved subject. Units are renumbered from 1
in document order; the document's own unit_number labels are ignored.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import status
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.core.exceptions import ServiceError, is_unique_violation
from timetable_portal.core.models import CourseUnit, Subject
from timetable_portal.core.validations import blank_to_none

from .schemas import CourseUnitCreate, CourseUnitResponse, CourseUnitUpdate, SyllabusImportResponse

logger = logging.getLogger(__name__)

DUPLICATE_UNIT_MESSAGE = "This unit number already exists for this subject"


def _to_response(u: CourseUnit) -> CourseUnitResponse:
    return CourseUnitResponse.model_validate(u)


async def _ensure_subject(db: AsyncSession, subject_id: UUID) -> Subject:
    subject = await db.get(Subject, subject_id)
    if not subject:
        raise ServiceError("Subject not found", status.HTTP_404_NOT_FOUND)
    return subject


async def _unit_number_taken(
    db: AsyncSession,
    subject_id: UUID,
    unit_number: int,
    exclude_unit_id: Optional[UUID] = None,
) -> bool:
    stmt = select(CourseUnit.id).where(
        CourseUnit.subject_id == subject_id, CourseUnit.unit_number == unit_number
    )
    if exclude_unit_id is not None:
        stmt = stmt.where(CourseUnit.id != exclude_unit_id)
    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none() is not None


async def _commit_unit(db: AsyncSession, obj: CourseUnit) -> None:
    try:
        await db.commit()
        await db.refresh(obj)
    except IntegrityError as e:
        await db.rollback()
        if is_unique_violation(e):
            raise ServiceError(DUPLICATE_UNIT_MESSAGE, status.HTTP_409_CONFLICT) from e
        raise ServiceError("Error saving unit", status.HTTP_400_BAD_REQUEST) from e


async def list_units(db: AsyncSession, subject_id: UUID) -> List[CourseUnitResponse]:
    await _ensure_subject(db, subject_id)
    result = await db.execute(
        select(CourseUnit).where(CourseUnit.subject_id == subject_id).order_by(CourseUnit.unit_number)
    )
    return [_to_response(u) for u in result.scalars().all()]


async def create_unit(db: AsyncSession, subject_id: UUID, payload: CourseUnitCreate) -> CourseUnitResponse:
    await _ensure_subject(db, subject_id)
    if await _unit_number_taken(db, subject_id, payload.unit_number):
        raise ServiceError(DUPLICATE_UNIT_MESSAGE, status.HTTP_409_CONFLICT)
    obj = CourseUnit(
        subject_id=subject_id,
        unit_number=payload.unit_number,
        unit_name=payload.unit_name,
        syllabus=payload.syllabus,
    )
    db.add(obj)
    await _commit_unit(db, obj)
    logger.info("Added unit %s to subject %s", obj.unit_number, subject_id)
    return _to_response(obj)


async def update_unit(
    db: AsyncSession,
    unit_id: UUID,
    payload: CourseUnitUpdate,
) -> Optional[CourseUnitResponse]:
    obj = await db.get(CourseUnit, unit_id)
    if not obj:
        return None
    if payload.unit_number is not None and payload.unit_number != obj.unit_number:
        if await _unit_number_taken(db, obj.subject_id, payload.unit_number, exclude_unit_id=obj.id):
            raise ServiceError(DUPLICATE_UNIT_MESSAGE, status.HTTP_409_CONFLICT)
        obj.unit_number = payload.unit_number
    if payload.unit_name is not None:
        obj.unit_name = payload.unit_name
    if "syllabus" in payload.model_fields_set:
        obj.syllabus = payload.syllabus
    await _commit_unit(db, obj)
    logger.info("Updated unit %s", obj.id)
    return _to_response(obj)


async def delete_unit(db: AsyncSession, unit_id: UUID) -> bool:
    obj = await db.get(CourseUnit, unit_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted unit %s", unit_id)
    return True


async def _resolve_import_subject(
    db: AsyncSession,
    document: Dict[str, Any],
    fallback_subject_id: Optional[UUID],
) -> Optional[Subject]:
    course = document.get("course")
    code = course.get("course_code") if isinstance(course, dict) else None
    if isinstance(code, str) and code.strip():
        result = await db.execute(select(Subject).where(Subject.code == code.strip().upper()))
        subject = result.scalar_one_or_none()
        if subject:
            return subject
    if fallback_subject_id is not None:
        return await db.get(Subject, fallback_subject_id)
    return None


def _syllabus_text(topics) -> Optional[str]:
    if isinstance(topics, list):
        return ", ".join(str(t) for t in topics)
    return blank_to_none(topics)


async def import_syllabus(
    db: AsyncSession,
    document: Dict[str, Any],
    subject_id: Optional[UUID] = None,
) -> SyllabusImportResponse:
    units = document.get("units") if isinstance(document, dict) else None
    if not isinstance(units, list):
        raise ServiceError("JSON must contain a 'units' array", status.HTTP_400_BAD_REQUEST)
    subject = await _resolve_import_subject(db, document, subject_id)
    if not subject:
        raise ServiceError("No subject selected", status.HTTP_400_BAD_REQUEST)

    await db.execute(delete(CourseUnit).where(CourseUnit.subject_id == subject.id))
    for index, unit in enumerate(units):
        unit = unit if isinstance(unit, dict) else {}
        db.add(
            CourseUnit(
                subject_id=subject.id,
                unit_number=index + 1,
                unit_name=unit.get("unit_title") or f"Unit {index + 1}",
                syllabus=_syllabus_text(unit.get("topics")),
            )
        )
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ServiceError("Error importing syllabus", status.HTTP_400_BAD_REQUEST) from e

    logger.info("Imported %d units for subject %s", len(units), subject.code)
    return SyllabusImportResponse(
        subject_id=subject.id,
        imported=len(units),
        message=f"{len(units)} units imported",
    )
