from fastapi import APIRouter, Depends, Query

from studio_slots.api.deps import get_catalog, get_booking_store, http_error
from studio_slots.api.schemas.slots import AvailableSlotsResponse
from studio_slots.core.errors import AvailabilityError
from studio_slots.services.availability import AvailabilityResolver
from studio_slots.services.booking_store import BookingStore
from studio_slots.services.intervals import parse_iso_date
from studio_slots.services.slot_catalog import SlotCatalog

router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("/available", response_model=AvailableSlotsResponse, response_model_by_alias=True)
async def available_slots(
    date_param: str = Query(..., alias="date", description="YYYY-MM-DD"),
    flow: str | None = Query(None, description="Restrict to slots offered to this booking flow"),
    catalog: SlotCatalog = Depends(get_catalog),
    store: BookingStore = Depends(get_booking_store),
) -> AvailableSlotsResponse:
    """All slots offered on the date's weekday, split into available and blocked.

    Callers must not allow checkout when this endpoint errors: a 503 means
    availability is unknown, not open.
    """
    try:
        d = parse_iso_date(date_param)
        if flow:
            catalog = catalog.for_flow(flow)
        result = await AvailabilityResolver(catalog, store).resolve(d)
    except AvailabilityError as e:
        raise http_error(e) from e
    return AvailableSlotsResponse.from_result(result)
