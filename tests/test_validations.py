"""Unit tests for roll number, name and text input rules."""

import pytest

from timetable_portal.core.validations import (
    ROLL_NUMBER_FORMAT_MESSAGE,
    ROLL_NUMBER_RANGE_MESSAGE,
    blank_to_none,
    is_valid_roll_number,
    require_text,
    validate_roll_number,
    validate_student_name,
)


@pytest.mark.parametrize("roll_number", ["231701001", "231701032", "231701063", "231701501"])
def test_valid_roll_numbers(roll_number: str) -> None:
    assert is_valid_roll_number(roll_number)
    assert validate_roll_number(f" {roll_number} ") == roll_number


@pytest.mark.parametrize("roll_number", ["231701000", "231701064", "231701500", "231701502"])
def test_roll_numbers_outside_class_range(roll_number: str) -> None:
    assert not is_valid_roll_number(roll_number)
    with pytest.raises(ValueError, match=ROLL_NUMBER_RANGE_MESSAGE):
        validate_roll_number(roll_number)


@pytest.mark.parametrize("roll_number", ["", "12345", "2317010011", "23170100A"])
def test_roll_numbers_must_be_nine_digits(roll_number: str) -> None:
    assert not is_valid_roll_number(roll_number)
    with pytest.raises(ValueError, match=ROLL_NUMBER_FORMAT_MESSAGE):
        validate_roll_number(roll_number)


def test_none_roll_number_is_invalid() -> None:
    assert is_valid_roll_number(None) is False


def test_student_name_is_trimmed() -> None:
    assert validate_student_name("  Asha Raman ") == "Asha Raman"


def test_student_name_length_limits() -> None:
    with pytest.raises(ValueError, match="at least 2"):
        validate_student_name(" A ")
    with pytest.raises(ValueError, match="less than 100"):
        validate_student_name("x" * 101)
    assert validate_student_name("x" * 100) == "x" * 100


def test_require_text() -> None:
    assert require_text("  Lab 1 ", "Room number") == "Lab 1"
    with pytest.raises(ValueError, match="Room number is required"):
        require_text("   ", "Room number")
    with pytest.raises(ValueError, match="less than 5 characters"):
        require_text("abcdef", "Title", max_length=5)


def test_blank_to_none() -> None:
    assert blank_to_none("  ") is None
    assert blank_to_none(None) is None
    assert blank_to_none(" CSD ") == "CSD"
