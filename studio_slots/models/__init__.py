from studio_slots.models.booking import (
    RESERVING_STATUSES,
    BookingStatus,
    ServiceBooking,
    ServiceBookingCreate,
    ServiceBookingPublic,
)
from studio_slots.models.slot_block import SlotBlock, SlotBlockCreate, SlotBlockPublic

__all__ = [
    "RESERVING_STATUSES",
    "BookingStatus",
    "ServiceBooking",
    "ServiceBookingCreate",
    "ServiceBookingPublic",
    "SlotBlock",
    "SlotBlockCreate",
    "SlotBlockPublic",
]
