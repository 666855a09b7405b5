from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from studio_slots.core.db import get_session
from studio_slots.core.errors import AvailabilityError, InvalidArgument, SlotConflict, StoreUnavailable
from studio_slots.services.booking_store import BookingStore, SqlBookingStore
from studio_slots.services.slot_catalog import SlotCatalog, default_catalog

_catalog = default_catalog()


def get_catalog() -> SlotCatalog:
    """Studio catalog. Override in app.dependency_overrides to serve another location."""
    return _catalog


def get_booking_store(session: AsyncSession = Depends(get_session)) -> BookingStore:
    return SqlBookingStore(session)


def error_response(status_code: int, error: str, message: str) -> HTTPException:
    """Every API error carries detail={"error": <code>, "message": <text>}."""
    return HTTPException(status_code=status_code, detail={"error": error, "message": message})


def not_found(message: str) -> HTTPException:
    return error_response(status.HTTP_404_NOT_FOUND, "NotFound", message)


def http_error(exc: AvailabilityError) -> HTTPException:
    """Map engine errors: 400 bad input, 409 taken, 503 store failure."""
    if isinstance(exc, StoreUnavailable):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(exc, InvalidArgument):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, SlotConflict):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=exc.to_detail())
