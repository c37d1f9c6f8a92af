"""
Week grid, day schedule and today summary built from timetable rows.

Entries are any objects with the timetable row attributes (ORM rows or response
models). Unparseable time slots are left out of the grid rather than failing the
whole week.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List

from timetable_portal.core.enums import HOLIDAYS, SHORT_DAYS, WEEK_DAYS, WORKING_DAYS, ClassType
from timetable_portal.core.timeslots import (
    DEFAULT_COMPACT_BELOW,
    DEFAULT_END_HOUR,
    DEFAULT_HOUR_HEIGHT,
    DEFAULT_MIN_HEIGHT,
    DEFAULT_START_HOUR,
    BlockLayout,
    block_layout,
    hour_labels,
    slot_sort_key,
)

logger = logging.getLogger(__name__)

DEFAULT_ACTIVE_DAY = "Tuesday"


@dataclass
class GridBlock:
    entry: object
    layout: BlockLayout


@dataclass
class DayColumn:
    day: str
    short_day: str
    is_today: bool
    is_holiday: bool
    blocks: List[GridBlock] = field(default_factory=list)


@dataclass
class WeekGrid:
    hour_labels: List[str]
    hour_height: float
    days: List[DayColumn]


@dataclass
class DaySchedule:
    day: str
    entries: List[object]
    count: int


@dataclass
class TodaySummary:
    day: str
    is_holiday: bool
    entries: List[object]
    theory_count: int
    lab_count: int


def _value(v):
    return getattr(v, "value", v)


def weekday_name(today: date) -> str:
    # date.weekday(): Monday == 0; WEEK_DAYS starts on Sunday
    return WEEK_DAYS[(today.weekday() + 1) % 7]


def is_holiday(day: str) -> bool:
    return day in HOLIDAYS


def default_active_day(today: date) -> str:
    name = weekday_name(today)
    return name if name in WORKING_DAYS else DEFAULT_ACTIVE_DAY


def sort_by_start(entries: Iterable) -> List[object]:
    return sorted(entries, key=lambda e: slot_sort_key(e.time_slot))


def entries_for_day(entries: Iterable, day: str) -> List[object]:
    return sort_by_start(e for e in entries if _value(e.day) == day)


def count_by_type(entries: Iterable):
    entries = list(entries)
    theory = sum(1 for e in entries if _value(e.class_type) == ClassType.THEORY.value)
    lab = sum(1 for e in entries if _value(e.class_type) == ClassType.LAB.value)
    return theory, lab


def build_week_grid(
    entries: Iterable,
    today: date,
    start_hour: int = DEFAULT_START_HOUR,
    end_hour: int = DEFAULT_END_HOUR,
    hour_height: float = DEFAULT_HOUR_HEIGHT,
    min_height: float = DEFAULT_MIN_HEIGHT,
    compact_below: float = DEFAULT_COMPACT_BELOW,
) -> WeekGrid:
    entries = list(entries)
    today_name = weekday_name(today)
    columns: List[DayColumn] = []
    for day, short_day in zip(WEEK_DAYS, SHORT_DAYS):
        column = DayColumn(
            day=day,
            short_day=short_day,
            is_today=day == today_name,
            is_holiday=is_holiday(day),
        )
        for entry in entries_for_day(entries, day):
            try:
                layout = block_layout(entry.time_slot, start_hour, hour_height, min_height, compact_below)
            except ValueError:
                logger.warning("Skipping entry %s with unparseable time slot %r", entry.id, entry.time_slot)
                continue
            column.blocks.append(GridBlock(entry=entry, layout=layout))
        columns.append(column)
    return WeekGrid(hour_labels=hour_labels(start_hour, end_hour), hour_height=hour_height, days=columns)


def build_day_schedule(day: str, entries: Iterable) -> DaySchedule:
    todays = entries_for_day(entries, day)
    return DaySchedule(day=day, entries=todays, count=len(todays))


def build_today_summary(entries: Iterable, today: date) -> TodaySummary:
    day = weekday_name(today)
    if is_holiday(day):
        return TodaySummary(day=day, is_holiday=True, entries=[], theory_count=0, lab_count=0)
    todays = entries_for_day(entries, day)
    theory, lab = count_by_type(todays)
    return TodaySummary(day=day, is_holiday=False, entries=todays, theory_count=theory, lab_count=lab)

