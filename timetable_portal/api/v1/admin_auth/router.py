from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.auth import services
from timetable_portal.auth.schemas import AdminSetupRequest, AdminStatusResponse, LoginRequest, LoginResponse, SignUpResponse
from timetable_portal.core.exceptions import ServiceError
from timetable_portal.db.session import get_db

router = APIRouter(prefix="/api/v1/admin/auth", tags=["admin-auth"])


@router.get("/status", response_model=AdminStatusResponse)
async def admin_status(db: AsyncSession = Depends(get_db)):
    """Tells the login page whether to offer the one-time setup form."""
    return AdminStatusResponse(admin_exists=await services.admin_exists(db))


@router.post(
    "/setup",
    response_model=SignUpResponse,
    status_code=http_status.HTTP_201_CREATED,
)
async def setup_admin(
    payload: AdminSetupRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        user, _ = await services.setup_admin(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return SignUpResponse(
        success=True,
        message="Admin account created! You can now log in with your credentials.",
        user_id=user.id,
    )


@router.post("/login", response_model=LoginResponse)
async def admin_login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    try:
        return await services.login_admin(db, payload)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
