import logging
from datetime import UTC, date, datetime, time, timedelta

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studio_slots.core.config import settings
from studio_slots.core.errors import InvalidArgument, SlotConflict
from studio_slots.models.booking import BookingStatus, ServiceBooking, ServiceBookingCreate
from studio_slots.models.slot_block import SlotBlock, SlotBlockCreate
from studio_slots.services.booking_store import BookingStore
from studio_slots.services.intervals import BookedInterval, add_minutes, day_of_week, overlaps
from studio_slots.services.slot_catalog import SlotCatalog

logger = logging.getLogger(__name__)


def _utc_naive_now() -> datetime:
    """Naive UTC for comparison with TIMESTAMP WITHOUT TIME ZONE."""
    return datetime.now(UTC).replace(tzinfo=None)


def _clashes(start: time, end: time, intervals: list[BookedInterval]) -> bool:
    return any(overlaps(start, end, i.start, i.end) for i in intervals)


def _occupied_end(start: time, duration_minutes: int | None, buffer_minutes: int) -> time:
    """End of the window a stored booking holds, as the booking store projects it."""
    duration = duration_minutes or settings.default_booking_duration_minutes
    return add_minutes(start, duration + buffer_minutes)


async def create_booking(
    session: AsyncSession,
    store: BookingStore,
    catalog: SlotCatalog,
    data: ServiceBookingCreate,
    buffer_minutes: int | None = None,
) -> ServiceBooking | None:
    """Insert a pending booking if the time it will occupy is still free; None on conflict.

    The overlap check is repeated here at write time because availability shown
    to the customer is only advisory. It covers both the catalog slot and the
    stored duration (plus buffer), whichever reaches later. The partial unique
    index on (event_date, event_time) catches the remaining concurrent-insert window.
    """
    buffer = settings.slot_buffer_minutes if buffer_minutes is None else buffer_minutes
    slot = catalog.for_flow(data.flow).find(day_of_week(data.event_date), data.event_time)
    if slot is None:
        raise InvalidArgument(
            f"{data.event_time.strftime('%H:%M')} is not a {data.flow} slot on {data.event_date.isoformat()}"
        )

    duration = data.duration_minutes
    if duration is None:
        duration = int(
            (datetime.combine(data.event_date, slot.end) - datetime.combine(data.event_date, slot.start))
            .total_seconds() // 60
        )
    end = max(slot.end, _occupied_end(slot.start, duration, buffer))

    intervals = await store.intervals_for_date(data.event_date)
    if _clashes(slot.start, end, intervals):
        logger.info("Booking conflict: %s %s-%s already taken", data.event_date, slot.start, end)
        return None

    booking = ServiceBooking(
        **data.model_dump(exclude={"duration_minutes"}),
        duration_minutes=duration,
        status=BookingStatus.PENDING.value,
    )
    session.add(booking)
    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        logger.warning("Booking conflict on insert: %s %s", data.event_date, slot.label)
        return None
    await session.refresh(booking)
    return booking


async def get_booking(session: AsyncSession, booking_id: int) -> ServiceBooking | None:
    result = await session.execute(select(ServiceBooking).where(ServiceBooking.id == booking_id))
    return result.scalar_one_or_none()


async def update_booking_status(
    session: AsyncSession,
    store: BookingStore,
    booking_id: int,
    status: BookingStatus,
    buffer_minutes: int | None = None,
) -> ServiceBooking | None:
    """Move a booking to `status`; None if it does not exist.

    Reviving a cancelled booking claims its time again, so it goes through the
    same overlap check as a new booking and raises SlotConflict if taken.
    """
    booking = await get_booking(session, booking_id)
    if not booking:
        return None
    reopening = booking.status == BookingStatus.CANCELLED.value and status != BookingStatus.CANCELLED
    if reopening:
        buffer = settings.slot_buffer_minutes if buffer_minutes is None else buffer_minutes
        end = _occupied_end(booking.event_time, booking.duration_minutes, buffer)
        intervals = await store.intervals_for_date(booking.event_date)
        if _clashes(booking.event_time, end, intervals):
            raise SlotConflict(
                f"Booking {booking_id} cannot be reopened: {booking.event_date.isoformat()} "
                f"{booking.event_time.strftime('%H:%M')} is taken"
            )

    booking.status = status.value
    session.add(booking)
    try:
        await session.flush()
    except IntegrityError as e:
        await session.rollback()
        raise SlotConflict(f"Booking {booking_id} cannot be reopened: slot start already booked") from e
    await session.refresh(booking)
    return booking


async def cancel_booking(session: AsyncSession, booking_id: int) -> bool:
    """Soft cancel: the row stays for reporting but no longer holds capacity."""
    booking = await get_booking(session, booking_id)
    if not booking:
        return False
    booking.status = BookingStatus.CANCELLED.value
    session.add(booking)
    await session.flush()
    return True


async def list_bookings_for_date(session: AsyncSession, d: date) -> list[ServiceBooking]:
    result = await session.execute(
        select(ServiceBooking).where(ServiceBooking.event_date == d).order_by(ServiceBooking.event_time)
    )
    return list(result.scalars().all())


async def create_block(session: AsyncSession, data: SlotBlockCreate) -> SlotBlock:
    if data.start_time >= data.end_time:
        raise InvalidArgument("Block must start before it ends")
    block = SlotBlock(**data.model_dump())
    session.add(block)
    await session.flush()
    await session.refresh(block)
    return block


async def list_blocks_for_date(session: AsyncSession, d: date) -> list[SlotBlock]:
    result = await session.execute(
        select(SlotBlock).where(SlotBlock.block_date == d).order_by(SlotBlock.start_time)
    )
    return list(result.scalars().all())


async def delete_block(session: AsyncSession, block_id: int) -> bool:
    result = await session.execute(select(SlotBlock).where(SlotBlock.id == block_id))
    block = result.scalar_one_or_none()
    if not block:
        return False
    await session.delete(block)
    await session.flush()
    return True


async def release_stale_pending_bookings(session: AsyncSession, hours: int) -> int:
    """Cancel pending bookings created more than `hours` ago (abandoned checkouts). Returns count."""
    cutoff = _utc_naive_now() - timedelta(hours=hours)
    result = await session.execute(
        update(ServiceBooking)
        .where(
            ServiceBooking.status == BookingStatus.PENDING.value,
            ServiceBooking.created_at < cutoff,
        )
        .values(status=BookingStatus.CANCELLED.value)
    )
    await session.flush()
    return result.rowcount or 0
