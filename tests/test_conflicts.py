"""Unit tests for the room double-booking check."""

import uuid
from types import SimpleNamespace

from timetable_portal.core.conflicts import conflict_message, find_room_conflict
from timetable_portal.core.enums import Day


def _entry(day="Tuesday", time_slot="09:00 - 10:00", room_number="A101", subject_name="Game Design"):
    return SimpleNamespace(
        id=uuid.uuid4(),
        day=day,
        time_slot=time_slot,
        room_number=room_number,
        subject_name=subject_name,
    )


def test_identical_day_slot_and_room_conflict() -> None:
    existing = _entry()
    assert find_room_conflict([existing], "Tuesday", "09:00 - 10:00", "A101") is existing


def test_enum_and_text_days_compare_equal() -> None:
    existing = _entry(day=Day.TUESDAY)
    assert find_room_conflict([existing], "Tuesday", "09:00 - 10:00", "A101") is existing
    assert find_room_conflict([_entry()], Day.TUESDAY, "09:00 - 10:00", "A101") is not None


def test_overlapping_but_different_slot_text_is_not_flagged() -> None:
    existing = _entry()
    assert find_room_conflict([existing], "Tuesday", "09:30 - 10:30", "A101") is None


def test_other_room_or_day_does_not_conflict() -> None:
    existing = _entry()
    assert find_room_conflict([existing], "Tuesday", "09:00 - 10:00", "A102") is None
    assert find_room_conflict([existing], "Wednesday", "09:00 - 10:00", "A101") is None


def test_entry_being_edited_is_excluded() -> None:
    existing = _entry()
    assert find_room_conflict([existing], "Tuesday", "09:00 - 10:00", "A101", exclude_id=existing.id) is None


def test_missing_fields_skip_the_check() -> None:
    assert find_room_conflict([_entry()], "Tuesday", "09:00 - 10:00", "") is None


def test_conflict_message() -> None:
    assert conflict_message("A101", _entry()) == "Room A101 is already booked for Game Design at this time"
