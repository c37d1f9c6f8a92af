"""
Weekly timetable rows. subject_name and staff_name are denormalized copies taken
from subjects/teachers at write time; the subject and teacher services re-sync them
when the source row changes.
(day, time_slot, room_number) is not a DB constraint; see core.conflicts.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, String, Uuid

from timetable_portal.core.enums import Batch, ClassType, Day
from timetable_portal.db.session import Base


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# Shared with subject_batch_preferences so Postgres sees a single batch_type
batch_type = Enum(Batch, name="batch_type", values_callable=_enum_values)
day_type = Enum(Day, name="day_type", values_callable=_enum_values)
class_type_enum = Enum(ClassType, name="class_type", values_callable=_enum_values)


class TimetableEntry(Base):
    __tablename__ = "timetable"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    day = Column(day_type, nullable=False)
    time_slot = Column(String(50), nullable=False)  # "09:00 - 10:00"
    course_code = Column(String(50), nullable=False, index=True)
    subject_name = Column(String(255), nullable=False)
    class_type = Column(class_type_enum, nullable=False)
    batch = Column(batch_type, nullable=False, default=Batch.ALL)
    room_number = Column(String(50), nullable=False)
    staff_name = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
