"""Unit tests for time slot parsing, formatting and grid placement."""

import pytest

from timetable_portal.core.timeslots import (
    block_layout,
    format_display_time,
    format_time_slot,
    hour_labels,
    parse_time_slot,
    parse_time_to_minutes,
    slot_sort_key,
    split_time_slot,
)


def test_parse_time_to_minutes() -> None:
    assert parse_time_to_minutes("8:00") == 480
    assert parse_time_to_minutes("13:20") == 800
    assert parse_time_to_minutes("09:00:00") == 540


@pytest.mark.parametrize("value", ["", "9am", "24:00", "10:60", "1:2:3:4"])
def test_parse_time_rejects_bad_values(value: str) -> None:
    with pytest.raises(ValueError):
        parse_time_to_minutes(value)


def test_split_time_slot_accepts_both_separators() -> None:
    assert split_time_slot("09:00 - 10:00") == ("09:00", "10:00")
    assert split_time_slot("9:00-10:00") == ("9:00", "10:00")
    with pytest.raises(ValueError):
        split_time_slot("09:00")


def test_parse_time_slot() -> None:
    assert parse_time_slot("13:20 - 15:00") == (800, 900)


def test_format_time_slot_pads_hours() -> None:
    assert format_time_slot("9:00", "10:00") == "09:00 - 10:00"
    assert format_time_slot("13:20", "15:00") == "13:20 - 15:00"


def test_format_display_time() -> None:
    assert format_display_time("13:05") == "1:05 PM"
    assert format_display_time("09:30") == "9:30 AM"
    assert format_display_time("12:00") == "12:00 PM"
    assert format_display_time("00:15") == "12:15 AM"
    assert format_display_time("") == "Select time"


def test_block_layout_student_scale() -> None:
    layout = block_layout("09:00 - 10:00")
    assert layout.top == 60
    assert layout.height == 60
    assert layout.compact is False


def test_block_layout_enforces_minimum_height() -> None:
    layout = block_layout("08:00 - 08:30")
    assert layout.top == 0
    assert layout.height == 40
    assert layout.compact is True


def test_block_layout_admin_scale() -> None:
    layout = block_layout("10:00 - 11:30", hour_height=70, min_height=50)
    assert layout.top == 140
    assert layout.height == 105
    assert layout.compact is False

    layout = block_layout("10:00 - 10:45", hour_height=70, min_height=50)
    assert layout.height == 52.5
    assert layout.compact is True
    assert block_layout("10:00 - 10:45", hour_height=70, min_height=50, compact_below=50).compact is False


def test_block_layout_rejects_bad_slot() -> None:
    with pytest.raises(ValueError):
        block_layout("TBA")


def test_hour_labels() -> None:
    labels = hour_labels(8, 17)
    assert len(labels) == 10
    assert labels[0] == "8:00 AM"
    assert labels[4] == "12:00 PM"
    assert labels[-1] == "5:00 PM"


def test_slot_sort_key_orders_by_start_and_puts_bad_slots_last() -> None:
    slots = ["10:00 - 11:00", "TBA", "9:00 - 10:00", "13:20 - 15:00"]
    assert sorted(slots, key=slot_sort_key) == ["9:00 - 10:00", "10:00 - 11:00", "13:20 - 15:00", "TBA"]
