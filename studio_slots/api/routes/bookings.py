import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from studio_slots.api.deps import error_response, get_booking_store, get_catalog, http_error, not_found
from studio_slots.api.schemas.booking import BookingStatusUpdate
from studio_slots.core.db import get_session
from studio_slots.core.errors import AvailabilityError
from studio_slots.models.booking import ServiceBooking, ServiceBookingCreate, ServiceBookingPublic
from studio_slots.services.booking_service import (
    cancel_booking,
    create_booking,
    list_bookings_for_date,
    update_booking_status,
)
from studio_slots.services.booking_store import BookingStore
from studio_slots.services.slot_catalog import SlotCatalog

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/bookings", tags=["bookings"])


def _to_public(b: ServiceBooking) -> ServiceBookingPublic:
    return ServiceBookingPublic.model_validate(b, from_attributes=True)


@router.post("", response_model=ServiceBookingPublic, status_code=status.HTTP_201_CREATED)
async def book_slot(
    body: ServiceBookingCreate,
    session: AsyncSession = Depends(get_session),
    store: BookingStore = Depends(get_booking_store),
    catalog: SlotCatalog = Depends(get_catalog),
) -> ServiceBookingPublic:
    try:
        booking = await create_booking(session, store, catalog, body)
    except AvailabilityError as e:
        raise http_error(e) from e
    if not booking:
        raise error_response(
            status.HTTP_409_CONFLICT,
            "SlotConflict",
            "Slot is no longer available. Please choose another time.",
        )
    logger.info("Booking %s created for %s %s", booking.id, booking.event_date, booking.event_time)
    return _to_public(booking)


@router.get("", response_model=list[ServiceBookingPublic])
async def list_bookings(
    date_param: date = Query(..., alias="date"),
    session: AsyncSession = Depends(get_session),
) -> list[ServiceBookingPublic]:
    bookings = await list_bookings_for_date(session, date_param)
    return [_to_public(b) for b in bookings]


@router.patch("/{booking_id}/status", response_model=ServiceBookingPublic)
async def set_booking_status(
    booking_id: int,
    body: BookingStatusUpdate,
    session: AsyncSession = Depends(get_session),
    store: BookingStore = Depends(get_booking_store),
) -> ServiceBookingPublic:
    try:
        booking = await update_booking_status(session, store, booking_id, body.status)
    except AvailabilityError as e:
        raise http_error(e) from e
    if not booking:
        raise not_found(f"Booking {booking_id} not found")
    return _to_public(booking)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel(
    booking_id: int,
    session: AsyncSession = Depends(get_session),
) -> None:
    ok = await cancel_booking(session, booking_id)
    if not ok:
        raise not_found(f"Booking {booking_id} not found")
