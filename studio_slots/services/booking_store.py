import logging
from datetime import date
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studio_slots.core.config import settings
from studio_slots.core.errors import StoreUnavailable
from studio_slots.models.booking import RESERVING_STATUSES, BookingStatus, ServiceBooking
from studio_slots.models.slot_block import SlotBlock
from studio_slots.services.intervals import BookedInterval, IntervalStatus, add_minutes

logger = logging.getLogger(__name__)

_STATUS_MAP = {
    BookingStatus.PENDING.value: IntervalStatus.PENDING,
    BookingStatus.DEPOSIT_PAID.value: IntervalStatus.CONFIRMED,
    BookingStatus.CONFIRMED.value: IntervalStatus.CONFIRMED,
}


class BookingStore(Protocol):
    async def intervals_for_date(self, d: date) -> list[BookedInterval]:
        """Every non-cancelled booking and manual block on `d`. Raises StoreUnavailable."""
        ...


class SqlBookingStore:
    """Reads service_bookings and slot_blocks and projects them to BookedInterval."""

    def __init__(
        self,
        session: AsyncSession,
        buffer_minutes: int | None = None,
        default_duration_minutes: int | None = None,
    ):
        self.session = session
        self.buffer_minutes = settings.slot_buffer_minutes if buffer_minutes is None else buffer_minutes
        self.default_duration_minutes = (
            settings.default_booking_duration_minutes
            if default_duration_minutes is None
            else default_duration_minutes
        )

    async def intervals_for_date(self, d: date) -> list[BookedInterval]:
        try:
            bookings = await self.session.execute(
                select(ServiceBooking).where(
                    ServiceBooking.event_date == d,
                    ServiceBooking.status.in_(RESERVING_STATUSES),
                )
            )
            blocks = await self.session.execute(select(SlotBlock).where(SlotBlock.block_date == d))
            booking_rows = bookings.scalars().all()
            block_rows = blocks.scalars().all()
        except SQLAlchemyError as e:
            logger.exception("Booking store read failed for %s", d)
            raise StoreUnavailable(f"Could not read bookings for {d.isoformat()}") from e

        intervals = [self._from_booking(b) for b in booking_rows]
        intervals.extend(self._from_block(b) for b in block_rows)
        return intervals

    def _from_booking(self, b: ServiceBooking) -> BookedInterval:
        duration = b.duration_minutes or self.default_duration_minutes
        end = add_minutes(b.event_time, duration + self.buffer_minutes)
        return BookedInterval(date=b.event_date, start=b.event_time, end=end, status=_STATUS_MAP[b.status])

    def _from_block(self, b: SlotBlock) -> BookedInterval:
        end = add_minutes(b.end_time, self.buffer_minutes)
        return BookedInterval(date=b.block_date, start=b.start_time, end=end, status=IntervalStatus.BLOCKED)
