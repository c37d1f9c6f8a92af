"""
Time-slot parsing and grid layout.

Timetable rows store their time as display text ("9:00 - 10:00"). The calendar
positions each class absolutely inside an 8am-5pm column: top is the offset from
the grid start, height is proportional to the duration and never smaller than a
minimum so short classes stay tappable.
"""

from dataclasses import dataclass
from typing import List, Tuple

DEFAULT_START_HOUR = 8
DEFAULT_END_HOUR = 17
DEFAULT_HOUR_HEIGHT = 60
DEFAULT_MIN_HEIGHT = 40
# Blocks shorter than this render course code only
DEFAULT_COMPACT_BELOW = 60


@dataclass(frozen=True)
class BlockLayout:
    top: float
    height: float
    compact: bool


def parse_time_to_minutes(value: str) -> int:
    """'8:00' -> 480, '13:20' -> 800. Seconds, if present, are ignored."""
    parts = (value or "").strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid time '{value}': expected H:MM or HH:MM")
    hours, minutes = int(parts[0]), int(parts[1])
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid time '{value}': out of range")
    return hours * 60 + minutes


def split_time_slot(time_slot: str) -> Tuple[str, str]:
    slot = (time_slot or "").strip()
    parts = slot.split(" - ") if " - " in slot else slot.split("-")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise ValueError(f"Invalid time slot '{time_slot}': expected 'start - end'")
    return parts[0].strip(), parts[1].strip()


def parse_time_slot(time_slot: str) -> Tuple[int, int]:
    start, end = split_time_slot(time_slot)
    return parse_time_to_minutes(start), parse_time_to_minutes(end)


def _hhmm(value: str) -> str:
    minutes = parse_time_to_minutes(value)
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_time_slot(start: str, end: str) -> str:
    """Compose the stored slot text from two picker values: '9:00', '10:00' -> '09:00 - 10:00'."""
    return f"{_hhmm(start)} - {_hhmm(end)}"


def format_display_time(value: str) -> str:
    """24-hour picker value to its 12-hour label: '13:05' -> '1:05 PM'."""
    if not value:
        return "Select time"
    minutes = parse_time_to_minutes(value)
    hour, minute = divmod(minutes, 60)
    period = "PM" if hour >= 12 else "AM"
    display_hour = hour - 12 if hour > 12 else (12 if hour == 0 else hour)
    return f"{display_hour}:{minute:02d} {period}"


def block_layout(
    time_slot: str,
    start_hour: int = DEFAULT_START_HOUR,
    hour_height: float = DEFAULT_HOUR_HEIGHT,
    min_height: float = DEFAULT_MIN_HEIGHT,
    compact_below: float = DEFAULT_COMPACT_BELOW,
) -> BlockLayout:
    start_minutes, end_minutes = parse_time_slot(time_slot)
    top = (start_minutes - start_hour * 60) / 60 * hour_height
    height = (end_minutes - start_minutes) / 60 * hour_height
    height = max(height, min_height)
    return BlockLayout(top=top, height=height, compact=height < compact_below)


def hour_labels(start_hour: int = DEFAULT_START_HOUR, end_hour: int = DEFAULT_END_HOUR) -> List[str]:
    labels = []
    for hour in range(start_hour, end_hour + 1):
        if hour < 12:
            labels.append(f"{hour}:00 AM")
        elif hour == 12:
            labels.append("12:00 PM")
        else:
            labels.append(f"{hour - 12}:00 PM")
    return labels


def slot_sort_key(time_slot: str) -> Tuple[int, int, str]:
    """Order by start time; slots that do not parse go last, by text."""
    try:
        start, _ = parse_time_slot(time_slot)
    except ValueError:
        return (1, 0, time_slot or "")
    return (0, start, time_slot)


def time_to_str(value) -> str:
    """Accept a datetime.time or 'HH:MM' text and return 'HH:MM'."""
    if hasattr(value, "strftime"):
        return value.strftime("%H:%M")
    return _hhmm(value)
