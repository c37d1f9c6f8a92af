import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.core.models import Announcement
from timetable_portal.core.validations import DISPLAY_DURATION_CHOICES

from .schemas import (
    AnnouncementCreate,
    AnnouncementResponse,
    AnnouncementUpdate,
    DurationChoice,
    DurationChoicesResponse,
)

logger = logging.getLogger(__name__)


def _to_response(a: Announcement) -> AnnouncementResponse:
    return AnnouncementResponse.model_validate(a)


def _newest_first():
    return (Announcement.created_at.desc(), Announcement.id)


async def create_announcement(db: AsyncSession, payload: AnnouncementCreate) -> AnnouncementResponse:
    obj = Announcement(
        title=payload.title,
        content=payload.content,
        is_active=payload.is_active,
        display_duration=payload.display_duration,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("Created announcement %s", obj.id)
    return _to_response(obj)


async def list_announcements(db: AsyncSession) -> List[AnnouncementResponse]:
    result = await db.execute(select(Announcement).order_by(*_newest_first()))
    return [_to_response(a) for a in result.scalars().all()]


async def list_active_announcements(db: AsyncSession) -> List[AnnouncementResponse]:
    result = await db.execute(
        select(Announcement).where(Announcement.is_active.is_(True)).order_by(*_newest_first())
    )
    return [_to_response(a) for a in result.scalars().all()]


async def get_announcement(db: AsyncSession, announcement_id: UUID) -> Optional[AnnouncementResponse]:
    obj = await db.get(Announcement, announcement_id)
    return _to_response(obj) if obj else None


async def update_announcement(
    db: AsyncSession,
    announcement_id: UUID,
    payload: AnnouncementUpdate,
) -> Optional[AnnouncementResponse]:
    obj = await db.get(Announcement, announcement_id)
    if not obj:
        return None
    if payload.title is not None:
        obj.title = payload.title
    if payload.content is not None:
        obj.content = payload.content
    if payload.is_active is not None:
        obj.is_active = payload.is_active
    # null clears the duration, so only skip it when the field was not sent
    if "display_duration" in payload.model_fields_set:
        obj.display_duration = payload.display_duration
    await db.commit()
    await db.refresh(obj)
    logger.info("Updated announcement %s", obj.id)
    return _to_response(obj)


async def toggle_announcement(db: AsyncSession, announcement_id: UUID) -> Optional[AnnouncementResponse]:
    obj = await db.get(Announcement, announcement_id)
    if not obj:
        return None
    obj.is_active = not obj.is_active
    await db.commit()
    await db.refresh(obj)
    logger.info("Announcement %s is_active=%s", obj.id, obj.is_active)
    return _to_response(obj)


async def delete_announcement(db: AsyncSession, announcement_id: UUID) -> bool:
    obj = await db.get(Announcement, announcement_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    logger.info("Deleted announcement %s", announcement_id)
    return True


def get_duration_choices() -> DurationChoicesResponse:
    choices = [DurationChoice(label="Until dismissed", value=None)]
    choices.extend(DurationChoice(label=f"{seconds} seconds", value=seconds) for seconds in DISPLAY_DURATION_CHOICES)
    return DurationChoicesResponse(choices=choices)
