from datetime import UTC, date, datetime, time
from enum import Enum

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel


def _utc_naive_now() -> datetime:
    """Naive UTC for TIMESTAMP WITHOUT TIME ZONE columns."""
    return datetime.now(UTC).replace(tzinfo=None)


class BookingStatus(str, Enum):
    PENDING = "pending"
    DEPOSIT_PAID = "deposit_paid"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


# Statuses that hold studio capacity
RESERVING_STATUSES = (
    BookingStatus.PENDING.value,
    BookingStatus.DEPOSIT_PAID.value,
    BookingStatus.CONFIRMED.value,
)


class ServiceBooking(SQLModel, table=True):
    __tablename__ = "service_bookings"
    # Last line of defence against two live bookings on the same slot
    __table_args__ = (
        Index(
            "uq_service_bookings_active_slot",
            "event_date",
            "event_time",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
    )
    id: int | None = Field(default=None, primary_key=True)
    service_name: str
    flow: str = Field(default="walk_in")
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    guest_count: int = 1
    event_date: date = Field(index=True)
    event_time: time
    duration_minutes: int | None = None
    status: str = Field(default=BookingStatus.PENDING.value, index=True)
    created_at: datetime = Field(default_factory=_utc_naive_now)


class ServiceBookingCreate(SQLModel):
    service_name: str
    flow: str = "walk_in"
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    guest_count: int = Field(default=1, ge=1)
    event_date: date
    event_time: time
    duration_minutes: int | None = Field(default=None, gt=0)


class ServiceBookingPublic(SQLModel):
    id: int
    service_name: str
    flow: str
    customer_name: str
    customer_email: str
    guest_count: int
    event_date: date
    event_time: time
    duration_minutes: int | None = None
    status: str
    created_at: datetime
