from datetime import UTC, date, datetime, time

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel


def _utc_naive_now() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class SlotBlock(SQLModel, table=True):
    """A manual block set from the back-office (private event, maintenance, holiday)."""

    __tablename__ = "slot_blocks"
    __table_args__ = (CheckConstraint("start_time < end_time", name="ck_slot_blocks_start_before_end"),)
    id: int | None = Field(default=None, primary_key=True)
    block_date: date = Field(index=True)
    start_time: time
    end_time: time
    reason: str | None = None
    created_at: datetime = Field(default_factory=_utc_naive_now)


class SlotBlockCreate(SQLModel):
    block_date: date
    start_time: time
    end_time: time
    reason: str | None = None


class SlotBlockPublic(SQLModel):
    id: int
    block_date: date
    start_time: time
    end_time: time
    reason: str | None = None
    created_at: datetime
