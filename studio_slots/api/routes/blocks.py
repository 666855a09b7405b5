from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from studio_slots.api.deps import http_error, not_found
from studio_slots.core.db import get_session
from studio_slots.core.errors import AvailabilityError
from studio_slots.models.slot_block import SlotBlockCreate, SlotBlockPublic
from studio_slots.services.booking_service import create_block, delete_block, list_blocks_for_date

router = APIRouter(prefix="/blocks", tags=["blocks"])


@router.post("", response_model=SlotBlockPublic, status_code=status.HTTP_201_CREATED)
async def add_block(
    body: SlotBlockCreate,
    session: AsyncSession = Depends(get_session),
) -> SlotBlockPublic:
    """Manually block part of a day. Any slot overlapping it shows as blocked."""
    try:
        block = await create_block(session, body)
    except AvailabilityError as e:
        raise http_error(e) from e
    return SlotBlockPublic.model_validate(block, from_attributes=True)


@router.get("", response_model=list[SlotBlockPublic])
async def list_blocks(
    date_param: date = Query(..., alias="date"),
    session: AsyncSession = Depends(get_session),
) -> list[SlotBlockPublic]:
    blocks = await list_blocks_for_date(session, date_param)
    return [SlotBlockPublic.model_validate(b, from_attributes=True) for b in blocks]


@router.delete("/{block_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_block(
    block_id: int,
    session: AsyncSession = Depends(get_session),
) -> None:
    ok = await delete_block(session, block_id)
    if not ok:
        raise not_found(f"Block {block_id} not found")
