import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from studio_slots.core.errors import InvalidArgument, InvalidDate


class IntervalStatus(str, Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class BookedInterval:
    """Narrow projection of a booking or manual block: just what availability needs."""

    date: date
    start: time
    end: time
    status: IntervalStatus


def day_of_week(d: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return d.isoweekday() % 7


def overlaps(s1: time, e1: time, s2: time, e2: time) -> bool:
    """Half-open overlap of [s1, e1) and [s2, e2). Adjacent ranges do not overlap."""
    return s1 < e2 and s2 < e1


def add_minutes(t: time, minutes: int) -> time:
    """Wall-clock arithmetic capped at end of day, never wrapping to the next day."""
    base = datetime.combine(date.min, t)
    moved = base + timedelta(minutes=minutes)
    if moved.date() != base.date():
        return time.max
    return moved.time()


def parse_hhmm(value: str) -> time:
    try:
        return datetime.strptime(value, "%H:%M").time()
    except ValueError as e:
        raise InvalidArgument(f"Invalid time {value!r}, expected HH:MM") from e


def format_hhmm(t: time) -> str:
    return t.strftime("%H:%M")


_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_iso_date(value: str) -> date:
    """Strict YYYY-MM-DD: zero-padded, no time part."""
    try:
        if not _ISO_DATE.fullmatch(value):
            raise ValueError(value)
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise InvalidDate(f"Invalid date {value!r}, expected YYYY-MM-DD") from e
