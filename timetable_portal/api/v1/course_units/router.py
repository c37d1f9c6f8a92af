from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.auth.rbac import require_admin
from timetable_portal.core.exceptions import ServiceError
from timetable_portal.db.session import get_db

from .schemas import CourseUnitCreate, CourseUnitResponse, CourseUnitUpdate, SyllabusImportResponse
from . import service

router = APIRouter(prefix="/api/v1", tags=["course-units"])


@router.get("/subjects/{subject_id}/units", response_model=List[CourseUnitResponse])
async def list_units(
    subject_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await service.list_units(db, subject_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/subjects/{subject_id}/units",
    response_model=CourseUnitResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_unit(
    subject_id: UUID,
    payload: CourseUnitCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await service.create_unit(db, subject_id, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post(
    "/course-units/import",
    response_model=SyllabusImportResponse,
    dependencies=[Depends(require_admin)],
)
async def import_syllabus(
    document: Dict[str, Any] = Body(...),
    subject_id: Optional[UUID] = Query(None, description="Used when the document names no known course"),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await service.import_syllabus(db, document, subject_id=subject_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put(
    "/course-units/{unit_id}",
    response_model=CourseUnitResponse,
    dependencies=[Depends(require_admin)],
)
async def update_unit(
    unit_id: UUID,
    payload: CourseUnitUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        obj = await service.update_unit(db, unit_id, payload)
        if not obj:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unit not found")
        return obj
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/course-units/{unit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_unit(
    unit_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    deleted = await service.delete_unit(db, unit_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unit not found")
