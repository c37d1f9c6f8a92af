from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from timetable_portal.api.v1.admin_auth.router import router as admin_auth_router
from timetable_portal.api.v1.announcements.router import router as announcements_router
from timetable_portal.api.v1.auth.router import router as auth_router
from timetable_portal.api.v1.course_units.router import router as course_units_router
from timetable_portal.api.v1.courses.router import router as courses_router
from timetable_portal.api.v1.student.router import router as student_router
from timetable_portal.api.v1.subjects.router import router as subjects_router
from timetable_portal.api.v1.teachers.router import router as teachers_router
from timetable_portal.api.v1.timetables.router import router as timetables_router
from timetable_portal.core.config import settings
from timetable_portal.core.logging import configure_logging


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title="Class Timetable Portal")

    # CORS: allow the student and admin frontends to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(auth_router)
    app.include_router(admin_auth_router)
    app.include_router(student_router)
    app.include_router(subjects_router)
    app.include_router(courses_router)
    app.include_router(teachers_router)
    app.include_router(timetables_router)
    app.include_router(announcements_router)
    app.include_router(course_units_router)

    @app.get("/", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
