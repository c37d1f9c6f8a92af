"""
Seed script to create the designated admin account.

Run once (e.g. after schema_check) with env set:
  ADMIN_EMAIL=admin@yourcollege.edu
  ADMIN_PASSWORD=YourSecurePassword

Creates (if missing):
- users: the ADMIN_EMAIL account
- user_roles: an "admin" row for that account

The same bootstrap is available over HTTP at POST /api/v1/admin/auth/setup
while no admin exists.
"""
import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from timetable_portal.auth.models import User, UserRole
from timetable_portal.auth.security import hash_password
from timetable_portal.auth.services import get_user_by_email, has_role
from timetable_portal.core.config import settings
from timetable_portal.core.enums import AppRole
from timetable_portal.db.session import AsyncSessionLocal


async def seed_admin(db: AsyncSession) -> None:
    email = settings.admin_email.strip().lower()
    password = settings.admin_password
    if not password:
        print("ADMIN_PASSWORD not set; skipping admin user.")
        return

    user = await get_user_by_email(db, email)
    if not user:
        user = User(email=email, password_hash=hash_password(password))
        db.add(user)
        await db.flush()
        print("Created admin user:", email)
    else:
        user.password_hash = hash_password(password)
        print("Updated password for existing user:", email)

    if not await has_role(db, user.id, AppRole.ADMIN):
        db.add(UserRole(user_id=user.id, role=AppRole.ADMIN))
        print("Granted admin role.")

    await db.commit()
    result = await db.execute(select(UserRole).where(UserRole.role == AppRole.ADMIN))
    print("Admin seed done. Admin accounts:", len(result.scalars().all()))


async def main() -> None:
    async with AsyncSessionLocal() as db:
        try:
            await seed_admin(db)
        except Exception as e:
            await db.rollback()
            print("Error:", e)
            raise


if __name__ == "__main__":
    asyncio.run(main())
