"""Subjects (courses) offered to the class. Code is unique and stored uppercased."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Uuid
from sqlalchemy.orm import relationship

from timetable_portal.db.session import Base


class Subject(Base):
    __tablename__ = "subjects"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String(50), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    department = Column(String(255), nullable=True)
    credit_hours = Column(Integer, nullable=True)
    # Lab sessions partitioned across batches; students pick one per course
    split_students = Column(Boolean, nullable=False, default=False)
    num_batches = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    units = relationship(
        "CourseUnit",
        back_populates="subject",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CourseUnit.unit_number",
    )
