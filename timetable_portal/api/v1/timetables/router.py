from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.auth.rbac import require_admin
from timetable_portal.core.enums import Batch, ClassType, Day
from timetable_portal.core.exceptions import ServiceError
from timetable_portal.db.session import get_db

from .schemas import (
    ConflictCheckRequest,
    ConflictCheckResponse,
    TimetableEntryCreate,
    TimetableEntryResponse,
    TimetableEntryUpdate,
    WeekGridResponse,
)
from . import service

router = APIRouter(prefix="/api/v1/timetable", tags=["timetable"])


@router.post(
    "",
    response_model=TimetableEntryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_entry(
    payload: TimetableEntryCreate,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await service.create_entry(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[TimetableEntryResponse])
async def list_entries(
    day: Optional[Day] = Query(None),
    class_type: Optional[ClassType] = Query(None),
    batch: Optional[Batch] = Query(None),
    q: Optional[str] = Query(None, description="Matches subject name, course code or staff name"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_entries(db, day=day, class_type=class_type, batch=batch, q=q)


@router.get(
    "/grid",
    response_model=WeekGridResponse,
    dependencies=[Depends(require_admin)],
)
async def admin_grid(db: AsyncSession = Depends(get_db)):
    return await service.get_admin_grid(db, date.today())


@router.post(
    "/conflicts",
    response_model=ConflictCheckResponse,
    dependencies=[Depends(require_admin)],
)
async def check_conflict(
    payload: ConflictCheckRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await service.check_conflict(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/{entry_id}", response_model=TimetableEntryResponse)
async def get_entry(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.get_entry(db, entry_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timetable entry not found")
    return obj


@router.put(
    "/{entry_id}",
    response_model=TimetableEntryResponse,
    dependencies=[Depends(require_admin)],
)
async def update_entry(
    entry_id: UUID,
    payload: TimetableEntryUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        obj = await service.update_entry(db, entry_id, payload)
        if not obj:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timetable entry not found")
        return obj
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_entry(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    deleted = await service.delete_entry(db, entry_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Timetable entry not found")
