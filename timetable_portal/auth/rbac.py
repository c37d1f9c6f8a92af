from fastapi import Depends, HTTPException, status

from timetable_portal.auth.dependencies import get_current_user
from timetable_portal.auth.schemas import CurrentUser


async def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Require the admin role. Guards every admin write and admin-only listing."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have admin privileges.",
        )
    return current_user
