from enum import Enum


class Day(str, Enum):
    """Working days stored on timetable rows."""

    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


class ClassType(str, Enum):
    THEORY = "Theory"
    LAB = "Lab"


class Batch(str, Enum):
    B1 = "B1"
    B2 = "B2"
    ALL = "ALL"


class StudentBatch(str, Enum):
    """Batch a student can pick for a split lab course."""

    B1 = "B1"
    B2 = "B2"


class TeacherStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class AppRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


WEEK_DAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
SHORT_DAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
HOLIDAYS = ("Sunday", "Monday")
WORKING_DAYS = tuple(d.value for d in Day)
