"""
Slot catalog: the canonical bookable windows of the studio.

One catalog value is shared by every booking flow. Flow-specific offers are
expressed as data on each slot (``flows``) and applied with ``for_flow``
instead of keeping a separate list per page.
"""

from collections.abc import Iterable
from datetime import time

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from studio_slots.core.errors import InvalidArgument

EVERY_DAY = frozenset(range(7))
THURSDAY = 4
FRIDAY = 5

FLOWS = frozenset({"corporate", "birthday", "kids", "walk_in"})


class TimeSlot(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: time
    end: time
    label: str
    eligible_weekdays: frozenset[int] = EVERY_DAY
    # Empty means bookable from every flow
    flows: frozenset[str] = frozenset()

    @field_validator("eligible_weekdays")
    @classmethod
    def _weekdays_valid(cls, v: frozenset[int]) -> frozenset[int]:
        if not v:
            raise ValueError("eligible_weekdays must not be empty")
        bad = [w for w in v if not 0 <= w <= 6]
        if bad:
            raise ValueError(f"weekday indices must be 0..6, got {sorted(bad)}")
        return v

    @field_validator("flows")
    @classmethod
    def _flows_known(cls, v: frozenset[str]) -> frozenset[str]:
        unknown = v - FLOWS
        if unknown:
            raise ValueError(f"unknown flows: {sorted(unknown)}")
        return v

    @model_validator(mode="after")
    def _start_before_end(self) -> "TimeSlot":
        if self.start >= self.end:
            raise ValueError(f"slot {self.label!r} must start before it ends")
        return self

    def offered_on(self, weekday: int) -> bool:
        return weekday in self.eligible_weekdays

    def offered_to(self, flow: str) -> bool:
        return not self.flows or flow in self.flows


def _check_weekday(weekday: int) -> None:
    if isinstance(weekday, bool) or not isinstance(weekday, int) or not 0 <= weekday <= 6:
        raise InvalidArgument(f"weekday must be an int in 0..6 (0=Sunday), got {weekday!r}")


class SlotCatalog:
    """Ordered, immutable list of TimeSlot. Declaration order is display order."""

    def __init__(self, slots: Iterable[TimeSlot]):
        self._slots: tuple[TimeSlot, ...] = tuple(slots)

    def __iter__(self):
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        return f"SlotCatalog({len(self._slots)} slots)"

    @property
    def slots(self) -> tuple[TimeSlot, ...]:
        return self._slots

    def slots_for_weekday(self, weekday: int) -> list[TimeSlot]:
        _check_weekday(weekday)
        return [s for s in self._slots if s.offered_on(weekday)]

    def for_flow(self, flow: str) -> "SlotCatalog":
        if flow not in FLOWS:
            raise InvalidArgument(f"unknown booking flow {flow!r}, expected one of {sorted(FLOWS)}")
        return SlotCatalog(s for s in self._slots if s.offered_to(flow))

    def find(self, weekday: int, start: time) -> TimeSlot | None:
        """The slot offered on `weekday` that begins at `start`, if any."""
        for s in self.slots_for_weekday(weekday):
            if s.start == start:
                return s
        return None


def _slot(start: str, end: str, label: str, **kwargs) -> TimeSlot:
    return TimeSlot(start=time.fromisoformat(start), end=time.fromisoformat(end), label=label, **kwargs)


def default_catalog() -> SlotCatalog:
    """The studio's standard sessions. Late evening runs Thu/Fri for private events only."""
    return SlotCatalog(
        [
            _slot("10:00", "12:30", "10:00 AM - 12:30 PM"),
            _slot("13:30", "15:00", "1:30 PM - 3:00 PM"),
            _slot("16:00", "17:30", "4:00 PM - 5:30 PM"),
            _slot("18:30", "20:00", "6:30 PM - 8:00 PM"),
            _slot(
                "21:00",
                "22:30",
                "9:00 PM - 10:30 PM",
                eligible_weekdays=frozenset({THURSDAY, FRIDAY}),
                flows=frozenset({"corporate", "birthday"}),
            ),
        ]
    )
