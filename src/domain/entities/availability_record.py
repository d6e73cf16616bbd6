"""
Availability record domain entity.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Set
from uuid import UUID

from src.domain.exceptions.conflict_error import SlotTakenError
from src.domain.value_objects.time_slot import AppointmentTimeSlot


@dataclass
class AvailabilityRecord:
    """Open time slots of one technician on one calendar day."""

    technician_id: UUID
    date: date
    open_slots: Set[AppointmentTimeSlot] = field(default_factory=set)

    def is_open(self, time_slot: AppointmentTimeSlot) -> bool:
        """Check if a slot is still bookable."""
        return time_slot in self.open_slots

    def has_open_slots(self) -> bool:
        """Check if at least one slot is bookable on this day."""
        return bool(self.open_slots)

    def book(self, time_slot: AppointmentTimeSlot) -> None:
        """Consume a slot."""
        if not self.is_open(time_slot):
            raise SlotTakenError(self.technician_id, self.date, time_slot.value)
        self.open_slots.discard(time_slot)

    def release(self, time_slot: AppointmentTimeSlot) -> None:
        """Give a slot back."""
        self.open_slots.add(time_slot)

    def ordered_slots(self) -> list[AppointmentTimeSlot]:
        """Get open slots in chronological order."""
        return [slot for slot in AppointmentTimeSlot.ordered() if slot in self.open_slots]
