from pydantic import BaseModel

from studio_slots.models.booking import BookingStatus


class BookingStatusUpdate(BaseModel):
    status: BookingStatus
