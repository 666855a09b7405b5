from datetime import time

import pytest
from sqlalchemy.exc import OperationalError

from conftest import THURSDAY, WEDNESDAY, hm
from studio_slots.core.errors import StoreUnavailable
from studio_slots.models.booking import BookingStatus, ServiceBooking
from studio_slots.models.slot_block import SlotBlock
from studio_slots.services.booking_store import SqlBookingStore
from studio_slots.services.intervals import IntervalStatus


def _booking(start: str, status: BookingStatus, duration: int | None = 90, d=WEDNESDAY) -> ServiceBooking:
    return ServiceBooking(
        service_name="Corporate team building",
        customer_name="Test Customer",
        customer_email="customer@example.com",
        event_date=d,
        event_time=hm(start),
        duration_minutes=duration,
        status=status.value,
    )


async def test_projects_bookings_and_blocks(session):
    session.add_all(
        [
            _booking("10:00", BookingStatus.PENDING),
            _booking("13:30", BookingStatus.DEPOSIT_PAID),
            _booking("16:00", BookingStatus.CONFIRMED),
            _booking("18:30", BookingStatus.CANCELLED),
            _booking("10:00", BookingStatus.CONFIRMED, d=THURSDAY),
            SlotBlock(block_date=WEDNESDAY, start_time=hm("11:00"), end_time=hm("11:45"), reason="Deep clean"),
        ]
    )
    await session.commit()

    intervals = await SqlBookingStore(session, buffer_minutes=0).intervals_for_date(WEDNESDAY)
    by_start = {i.start.strftime("%H:%M"): i for i in intervals}

    assert set(by_start) == {"10:00", "13:30", "16:00", "11:00"}
    assert by_start["10:00"].status is IntervalStatus.PENDING
    assert by_start["13:30"].status is IntervalStatus.CONFIRMED
    assert by_start["16:00"].status is IntervalStatus.CONFIRMED
    assert by_start["11:00"].status is IntervalStatus.BLOCKED
    assert by_start["16:00"].end == hm("17:30")
    assert by_start["11:00"].end == hm("11:45")
    assert all(i.date == WEDNESDAY for i in intervals)


async def test_default_duration_and_buffer(session):
    session.add(_booking("10:00", BookingStatus.CONFIRMED, duration=None))
    session.add(SlotBlock(block_date=WEDNESDAY, start_time=hm("21:00"), end_time=hm("23:30")))
    await session.commit()

    store = SqlBookingStore(session, buffer_minutes=60, default_duration_minutes=120)
    intervals = sorted(await store.intervals_for_date(WEDNESDAY), key=lambda i: i.start)

    assert intervals[0].end == hm("13:00")
    # buffer past midnight is capped at end of day
    assert intervals[1].end == time.max


async def test_read_failure_becomes_store_unavailable(session, monkeypatch):
    async def boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("server closed the connection"))

    monkeypatch.setattr(session, "execute", boom)
    with pytest.raises(StoreUnavailable) as excinfo:
        await SqlBookingStore(session).intervals_for_date(WEDNESDAY)
    assert isinstance(excinfo.value.__cause__, OperationalError)
