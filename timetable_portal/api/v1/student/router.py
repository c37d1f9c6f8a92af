from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.api.v1.timetables.schemas import WeekGridResponse
from timetable_portal.auth.dependencies import get_student_session
from timetable_portal.auth.schemas import StudentSession
from timetable_portal.auth.security import create_student_token
from timetable_portal.core.enums import Day
from timetable_portal.core.exceptions import ServiceError
from timetable_portal.db.session import get_db

from .schemas import (
    BatchPreferenceUpdate,
    BulkBatchUpdate,
    DashboardResponse,
    StudentBatchesResponse,
    StudentSessionCreate,
    StudentSessionResponse,
    StudentTimetableResponse,
    TodaySummaryResponse,
)
from . import service

router = APIRouter(prefix="/api/v1/student", tags=["student"])


@router.post(
    "/session",
    response_model=StudentSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_session(payload: StudentSessionCreate):
    """Name then roll number entry. The returned token is the whole session; nothing is stored."""
    token = create_student_token(name=payload.name, roll_number=payload.roll_number)
    return StudentSessionResponse(
        session_token=token,
        student=StudentSession(name=payload.name, roll_number=payload.roll_number),
    )


@router.get("/session", response_model=StudentSession)
async def read_session(student: StudentSession = Depends(get_student_session)):
    return student


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT)
async def end_session():
    # Stateless: the client discards its token
    return None


@router.get("/batches", response_model=StudentBatchesResponse)
async def list_batches(
    db: AsyncSession = Depends(get_db),
    student: StudentSession = Depends(get_student_session),
):
    return await service.list_batches(db, student.roll_number)


@router.put("/batches", response_model=StudentBatchesResponse)
async def update_batches(
    payload: BulkBatchUpdate,
    db: AsyncSession = Depends(get_db),
    student: StudentSession = Depends(get_student_session),
):
    try:
        return await service.update_batches(db, student.roll_number, payload.batches)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/batches/{course_code}", response_model=StudentBatchesResponse)
async def update_batch(
    course_code: str,
    payload: BatchPreferenceUpdate,
    db: AsyncSession = Depends(get_db),
    student: StudentSession = Depends(get_student_session),
):
    try:
        return await service.update_batches(db, student.roll_number, {course_code: payload.batch})
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/timetable", response_model=StudentTimetableResponse)
async def read_timetable(
    day: Optional[Day] = Query(None),
    db: AsyncSession = Depends(get_db),
    student: StudentSession = Depends(get_student_session),
):
    return await service.get_timetable(db, student.roll_number, day=day)


@router.get("/calendar", response_model=WeekGridResponse)
async def read_calendar(
    db: AsyncSession = Depends(get_db),
    student: StudentSession = Depends(get_student_session),
):
    return await service.get_calendar(db, student.roll_number, date.today())


@router.get("/today", response_model=TodaySummaryResponse)
async def read_today(
    db: AsyncSession = Depends(get_db),
    student: StudentSession = Depends(get_student_session),
):
    return await service.get_today(db, student.roll_number, date.today())


@router.get("/dashboard", response_model=DashboardResponse)
async def read_dashboard(
    db: AsyncSession = Depends(get_db),
    student: StudentSession = Depends(get_student_session),
):
    return await service.get_dashboard(db, student, date.today())
