from pydantic import BaseModel, ConfigDict, Field

from studio_slots.services.availability import AvailabilityResult
from studio_slots.services.intervals import format_hhmm
from studio_slots.services.slot_catalog import TimeSlot


class SlotInfo(BaseModel):
    start: str  # HH:MM
    end: str  # HH:MM
    label: str

    @classmethod
    def from_slot(cls, slot: TimeSlot) -> "SlotInfo":
        return cls(start=format_hhmm(slot.start), end=format_hhmm(slot.end), label=slot.label)


class AvailableSlotsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str  # YYYY-MM-DD
    all_slots: list[SlotInfo] = Field(alias="allSlots")
    available_slots: list[SlotInfo] = Field(alias="availableSlots")
    blocked_slots: list[SlotInfo] = Field(alias="blockedSlots")

    @classmethod
    def from_result(cls, result: AvailabilityResult) -> "AvailableSlotsResponse":
        return cls(
            date=result.date.isoformat(),
            all_slots=[SlotInfo.from_slot(s) for s in result.all_slots],
            available_slots=[SlotInfo.from_slot(s) for s in result.available_slots],
            blocked_slots=[SlotInfo.from_slot(s) for s in result.blocked_slots],
        )

