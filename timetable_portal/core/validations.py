"""
Input rules shared by the pydantic schemas and the student session flow.

Valid roll numbers: 231701001 to 231701063, and 231701501.
"""

import re

ROLL_NUMBER_PATTERN = re.compile(r"^[0-9]{9}$")
ROLL_NUMBER_MIN = 231701001
ROLL_NUMBER_MAX = 231701063
ROLL_NUMBER_EXTRA = 231701501

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

ANNOUNCEMENT_TITLE_MAX = 200
ANNOUNCEMENT_CONTENT_MAX = 2000
DISPLAY_DURATION_CHOICES = (5, 10, 15, 30, 60)

ROLL_NUMBER_FORMAT_MESSAGE = "Roll number must be exactly 9 digits"
ROLL_NUMBER_RANGE_MESSAGE = "Invalid roll number. Must be 231701001-231701063 or 231701501"


def is_valid_roll_number(roll_number: str) -> bool:
    if roll_number is None:
        return False
    value = str(roll_number).strip()
    if not ROLL_NUMBER_PATTERN.match(value):
        return False
    num = int(value)
    return ROLL_NUMBER_MIN <= num <= ROLL_NUMBER_MAX or num == ROLL_NUMBER_EXTRA


def validate_roll_number(roll_number: str) -> str:
    value = (roll_number or "").strip()
    if not ROLL_NUMBER_PATTERN.match(value):
        raise ValueError(ROLL_NUMBER_FORMAT_MESSAGE)
    if not is_valid_roll_number(value):
        raise ValueError(ROLL_NUMBER_RANGE_MESSAGE)
    return value


def validate_student_name(name: str) -> str:
    value = (name or "").strip()
    if len(value) < NAME_MIN_LENGTH:
        raise ValueError("Name must be at least 2 characters")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError("Name must be less than 100 characters")
    return value


def require_text(value: str, field_label: str, max_length: int = None) -> str:
    """Trim and reject blank values ("<Field> is required")."""
    text = (value or "").strip()
    if not text:
        raise ValueError(f"{field_label} is required")
    if max_length is not None and len(text) > max_length:
        raise ValueError(f"{field_label} must be less than {max_length} characters")
    return text


def blank_to_none(value):
    if value is None:
        return None
    text = str(value).strip()
    return text or None
