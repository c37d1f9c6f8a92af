import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, UniqueConstraint, Uuid

from timetable_portal.core.enums import Batch
from timetable_portal.core.models.timetable import batch_type
from timetable_portal.db.session import Base


class SubjectBatchPreference(Base):
    """Lab batch a student picked for a split course. Upserted on (roll_number, course_code)."""

    __tablename__ = "subject_batch_preferences"
    __table_args__ = (
        UniqueConstraint("roll_number", "course_code", name="uq_batch_pref_roll_course"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    roll_number = Column(String(20), nullable=False, index=True)
    course_code = Column(String(50), nullable=False)
    batch = Column(batch_type, nullable=False, default=Batch.B1)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
