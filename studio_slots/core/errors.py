class AvailabilityError(Exception):
    """Base for errors the availability engine surfaces to callers."""

    code = "AvailabilityError"

    def to_detail(self) -> dict[str, str]:
        return {"error": self.code, "message": str(self)}


class InvalidArgument(AvailabilityError, ValueError):
    """Caller passed a weekday, date, flow or slot outside the valid domain. Not retried."""

    code = "InvalidArgument"


class InvalidDate(InvalidArgument):
    code = "InvalidDate"


class StoreUnavailable(AvailabilityError):
    """Booking data could not be read. Safe to retry; never treat as 'available'."""

    code = "StoreUnavailable"


class SlotConflict(AvailabilityError):
    """The requested time overlaps a live booking or manual block."""

    code = "SlotConflict"
