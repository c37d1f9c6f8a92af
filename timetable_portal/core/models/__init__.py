from timetable_portal.core.models.announcement import Announcement
from timetable_portal.core.models.batch_preference import SubjectBatchPreference
from timetable_portal.core.models.course_unit import CourseUnit
from timetable_portal.core.models.subject import Subject
from timetable_portal.core.models.teacher import Teacher
from timetable_portal.core.models.timetable import TimetableEntry

__all__ = [
    "Announcement",
    "CourseUnit",
    "Subject",
    "SubjectBatchPreference",
    "Teacher",
    "TimetableEntry",
]
