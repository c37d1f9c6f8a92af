from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.api.v1.course_units import service as unit_service
from timetable_portal.api.v1.subjects import service as subject_service
from timetable_portal.api.v1.subjects.schemas import SubjectResponse
from timetable_portal.db.session import get_db

from .schemas import CourseDetailsResponse

router = APIRouter(prefix="/api/v1/courses", tags=["courses"])


@router.get("/{code}", response_model=CourseDetailsResponse)
async def get_course_details(
    code: str,
    db: AsyncSession = Depends(get_db),
):
    subject = await subject_service.get_subject_by_code(db, code)
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f'Course with code "{code}" could not be found.',
        )
    units = await unit_service.list_units(db, subject.id)
    return CourseDetailsResponse(subject=SubjectResponse.model_validate(subject), units=units)
