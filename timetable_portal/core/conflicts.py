"""
Room double-booking check for timetable writes.

Two entries conflict when day, time_slot text and room_number are all identical.
This is string equality on the stored slot, not interval overlap: "09:00 - 10:00"
and "09:30 - 10:30" in the same room are not flagged.
"""

from typing import Iterable, Optional
from uuid import UUID


def _value(v):
    return getattr(v, "value", v)


def find_room_conflict(
    entries: Iterable,
    day,
    time_slot: str,
    room_number: str,
    exclude_id: Optional[UUID] = None,
):
    """Return the first entry that already holds the room at this day/slot, or None."""
    if not day or not time_slot or not room_number:
        return None
    for entry in entries:
        if exclude_id is not None and entry.id == exclude_id:
            continue
        if (
            _value(entry.day) == _value(day)
            and entry.time_slot == time_slot
            and entry.room_number == room_number
        ):
            return entry
    return None


def conflict_message(room_number: str, entry) -> str:
    return f"Room {room_number} is already booked for {entry.subject_name} at this time"
