from typing import List

from pydantic import BaseModel

from timetable_portal.api.v1.course_units.schemas import CourseUnitResponse
from timetable_portal.api.v1.subjects.schemas import SubjectResponse


class CourseDetailsResponse(BaseModel):
    subject: SubjectResponse
    units: List[CourseUnitResponse]
