import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Uuid

from timetable_portal.db.session import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(20), nullable=False)  # Mr., Mrs., Ms., Dr.
    name = Column(String(255), nullable=False)
    department = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="active")  # active | inactive
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def display_name(self) -> str:
        return f"{self.title} {self.name}"
