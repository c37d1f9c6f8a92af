from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.auth.rbac import require_admin
from timetable_portal.core.enums import TeacherStatus
from timetable_portal.db.session import get_db

from .schemas import TeacherCreate, TeacherResponse, TeacherUpdate
from . import service

router = APIRouter(
    prefix="/api/v1/teachers",
    tags=["teachers"],
    dependencies=[Depends(require_admin)],
)


@router.post("", response_model=TeacherResponse, status_code=status.HTTP_201_CREATED)
async def create_teacher(
    payload: TeacherCreate,
    db: AsyncSession = Depends(get_db),
):
    return await service.create_teacher(db, payload)


@router.get("", response_model=List[TeacherResponse])
async def list_teachers(
    q: Optional[str] = Query(None, description="Matches teacher name or department"),
    status_filter: Optional[TeacherStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_teachers(db, q=q, status_filter=status_filter)


@router.get("/{teacher_id}", response_model=TeacherResponse)
async def get_teacher(
    teacher_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.get_teacher(db, teacher_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    return obj


@router.put("/{teacher_id}", response_model=TeacherResponse)
async def update_teacher(
    teacher_id: UUID,
    payload: TeacherUpdate,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.update_teacher(db, teacher_id, payload)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
    return obj


@router.delete("/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_teacher(
    teacher_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    deleted = await service.delete_teacher(db, teacher_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Teacher not found")
