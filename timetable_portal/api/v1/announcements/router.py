from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.auth.rbac import require_admin
from timetable_portal.db.session import get_db

from .schemas import AnnouncementCreate, AnnouncementResponse, AnnouncementUpdate, DurationChoicesResponse
from . import service

router = APIRouter(prefix="/api/v1/announcements", tags=["announcements"])

NOT_FOUND = "Announcement not found"


@router.get("/active", response_model=List[AnnouncementResponse])
async def list_active_announcements(db: AsyncSession = Depends(get_db)):
    return await service.list_active_announcements(db)


@router.get("/duration-choices", response_model=DurationChoicesResponse)
async def duration_choices():
    return service.get_duration_choices()


@router.get(
    "",
    response_model=List[AnnouncementResponse],
    dependencies=[Depends(require_admin)],
)
async def list_announcements(db: AsyncSession = Depends(get_db)):
    return await service.list_announcements(db)


@router.post(
    "",
    response_model=AnnouncementResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_announcement(
    payload: AnnouncementCreate,
    db: AsyncSession = Depends(get_db),
):
    return await service.create_announcement(db, payload)


@router.get(
    "/{announcement_id}",
    response_model=AnnouncementResponse,
    dependencies=[Depends(require_admin)],
)
async def get_announcement(
    announcement_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.get_announcement(db, announcement_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return obj


@router.put(
    "/{announcement_id}",
    response_model=AnnouncementResponse,
    dependencies=[Depends(require_admin)],
)
async def update_announcement(
    announcement_id: UUID,
    payload: AnnouncementUpdate,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.update_announcement(db, announcement_id, payload)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return obj


@router.patch(
    "/{announcement_id}/toggle",
    response_model=AnnouncementResponse,
    dependencies=[Depends(require_admin)],
)
async def toggle_announcement(
    announcement_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    obj = await service.toggle_announcement(db, announcement_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return obj


@router.delete(
    "/{announcement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_announcement(
    announcement_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    deleted = await service.delete_announcement(db, announcement_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
