# studio_slots/services/availability.py
"""
Slot availability for a single date.

Takes into account:
- Catalog slots offered on the date's weekday
- Existing pending/confirmed bookings
- Manual blocks from the back-office

The result is advisory: "available" means no known conflict as of this
read. Booking creation re-checks inside its own transaction.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from studio_slots.core.errors import InvalidArgument
from studio_slots.services.booking_store import BookingStore
from studio_slots.services.intervals import BookedInterval, day_of_week, overlaps
from studio_slots.services.slot_catalog import SlotCatalog, TimeSlot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvailabilityResult:
    date: date
    all_slots: list[TimeSlot] = field(default_factory=list)
    available_slots: list[TimeSlot] = field(default_factory=list)
    blocked_slots: list[TimeSlot] = field(default_factory=list)

    def is_available(self, slot: TimeSlot) -> bool:
        return slot in self.available_slots


def slot_is_blocked(slot: TimeSlot, intervals: list[BookedInterval]) -> bool:
    return any(overlaps(slot.start, slot.end, i.start, i.end) for i in intervals)


class AvailabilityResolver:
    def __init__(self, catalog: SlotCatalog, store: BookingStore):
        self.catalog = catalog
        self.store = store

    async def resolve(self, d: date) -> AvailabilityResult:
        # datetime is a date subclass but never equals a stored calendar date
        if not isinstance(d, date) or isinstance(d, datetime):
            raise InvalidArgument(f"expected a calendar date, got {type(d).__name__}")
        candidates = self.catalog.slots_for_weekday(day_of_week(d))
        if not candidates:
            return AvailabilityResult(date=d)

        # Single snapshot; StoreUnavailable propagates untouched
        intervals = await self.store.intervals_for_date(d)

        available: list[TimeSlot] = []
        blocked: list[TimeSlot] = []
        for slot in candidates:
            (blocked if slot_is_blocked(slot, intervals) else available).append(slot)

        logger.debug(
            "Availability %s: %d slots, %d available, %d blocked (%d intervals)",
            d.isoformat(),
            len(candidates),
            len(available),
            len(blocked),
            len(intervals),
        )
        return AvailabilityResult(
            date=d,
            all_slots=list(candidates),
            available_slots=available,
            blocked_slots=blocked,
        )
