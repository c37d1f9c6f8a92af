"""Unit tests for the week grid and today summary."""

import uuid
from datetime import date
from types import SimpleNamespace

from timetable_portal.core.calendar import (
    build_day_schedule,
    build_today_summary,
    build_week_grid,
    count_by_type,
    default_active_day,
    entries_for_day,
    weekday_name,
)

SUNDAY = date(2026, 10, 18)
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
THURSDAY = date(2026, 10, 22)


def _entry(day, time_slot, class_type="Theory", course_code="CD23631"):
    return SimpleNamespace(
        id=uuid.uuid4(),
        day=day,
        time_slot=time_slot,
        class_type=class_type,
        course_code=course_code,
    )


def test_weekday_name() -> None:
    assert weekday_name(SUNDAY) == "Sunday"
    assert weekday_name(MONDAY) == "Monday"
    assert weekday_name(TUESDAY) == "Tuesday"


def test_default_active_day() -> None:
    assert default_active_day(SUNDAY) == "Tuesday"
    assert default_active_day(MONDAY) == "Tuesday"
    assert default_active_day(THURSDAY) == "Thursday"


def test_entries_for_day_sorted_by_start() -> None:
    late = _entry("Tuesday", "13:20 - 15:00")
    early = _entry("Tuesday", "9:00 - 10:00")
    other = _entry("Wednesday", "8:00 - 9:00")
    assert entries_for_day([late, other, early], "Tuesday") == [early, late]


def test_count_by_type() -> None:
    entries = [_entry("Tuesday", "9:00 - 10:00"), _entry("Tuesday", "10:00 - 12:00", class_type="Lab")]
    assert count_by_type(entries) == (1, 1)


def test_week_grid_has_seven_columns_with_holidays_marked() -> None:
    grid = build_week_grid([], TUESDAY)
    assert [c.short_day for c in grid.days] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert [c.day for c in grid.days if c.is_holiday] == ["Sunday", "Monday"]
    assert [c.day for c in grid.days if c.is_today] == ["Tuesday"]
    assert grid.hour_labels[0] == "8:00 AM"
    assert grid.hour_height == 60


def test_week_grid_places_blocks_and_skips_bad_slots() -> None:
    good = _entry("Wednesday", "10:00 - 11:30")
    bad = _entry("Wednesday", "TBA")
    grid = build_week_grid([good, bad], TUESDAY, hour_height=70, min_height=50)
    wednesday = next(c for c in grid.days if c.day == "Wednesday")
    assert len(wednesday.blocks) == 1
    block = wednesday.blocks[0]
    assert block.entry is good
    assert block.layout.top == 140
    assert block.layout.height == 105


def test_week_grid_compact_threshold() -> None:
    # 50 minutes: 50 px on the student grid, about 58 px on the admin grid
    entry = _entry("Friday", "09:00 - 09:50")
    student = build_week_grid([entry], TUESDAY, hour_height=60, min_height=40, compact_below=50)
    admin = build_week_grid([entry], TUESDAY, hour_height=70, min_height=50, compact_below=60)
    student_block = next(c for c in student.days if c.day == "Friday").blocks[0]
    admin_block = next(c for c in admin.days if c.day == "Friday").blocks[0]
    assert student_block.layout.compact is False
    assert admin_block.layout.compact is True


def test_today_summary_on_holiday_is_empty() -> None:
    summary = build_today_summary([_entry("Tuesday", "9:00 - 10:00")], MONDAY)
    assert summary.is_holiday is True
    assert summary.day == "Monday"
    assert summary.entries == []
    assert (summary.theory_count, summary.lab_count) == (0, 0)


def test_today_summary_counts_todays_classes() -> None:
    entries = [
        _entry("Tuesday", "10:00 - 12:00", class_type="Lab"),
        _entry("Tuesday", "9:00 - 10:00"),
        _entry("Wednesday", "9:00 - 10:00"),
    ]
    summary = build_today_summary(entries, TUESDAY)
    assert summary.is_holiday is False
    assert [e.time_slot for e in summary.entries] == ["9:00 - 10:00", "10:00 - 12:00"]
    assert (summary.theory_count, summary.lab_count) == (1, 1)


def test_day_schedule() -> None:
    entries = [
        _entry("Friday", "14:00 - 15:00"),
        _entry("Friday", "8:00 - 9:00", class_type="Lab"),
        _entry("Saturday", "9:00 - 10:00"),
    ]
    schedule = build_day_schedule("Friday", entries)
    assert schedule.day == "Friday"
    assert schedule.count == 2
    assert [e.time_slot for e in schedule.entries] == ["8:00 - 9:00", "14:00 - 15:00"]
    assert build_day_schedule("Thursday", entries).count == 0
