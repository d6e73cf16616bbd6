"""Appointment domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from src.domain.exceptions.state_error import InvalidStateError
from src.domain.value_objects.address import Address
from src.domain.value_objects.appointment_status import AppointmentStatus
from src.domain.value_objects.time_slot import AppointmentTimeSlot


@dataclass
class Appointment:
    """A booked technician visit for one repair request."""

    repair_request_id: UUID
    technician_id: UUID
    user_id: str
    scheduled_date: date
    time_slot: AppointmentTimeSlot
    address: Address
    notes: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate appointment data."""
        if not self.address:
            raise ValueError("Service address is required")

        self.time_slot = AppointmentTimeSlot(self.time_slot)
        self.status = AppointmentStatus(self.status)

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    @property
    def is_active(self) -> bool:
        """Check if the appointment still holds its slot."""
        return self.status.is_active()

    def is_owned_by(self, user_id: str) -> bool:
        """Check if the given user booked this appointment."""
        return self.user_id == user_id

    def starts_at(self, timezone_name: str = "UTC") -> datetime:
        """Get the instant the visit begins."""
        return self.time_slot.starts_at(self.scheduled_date, timezone_name)

    def hours_until_start(self, now: datetime, timezone_name: str = "UTC") -> float:
        """Get hours left before the visit begins (negative once started)."""
        return (self.starts_at(timezone_name) - now).total_seconds() / 3600

    def cancel(self, reason: Optional[str] = None) -> None:
        """Soft-cancel the appointment."""
        if not self.status.can_be_cancelled():
            raise InvalidStateError(
                f"Cannot cancel appointment with status '{self.status.value}'"
            )
        self.status = AppointmentStatus.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = datetime.now(timezone.utc)
        self.updated_at = self.cancelled_at

    def move_to(
        self,
        scheduled_date: date,
        time_slot: AppointmentTimeSlot,
        notes: Optional[str] = None,
    ) -> None:
        """Move the visit to another slot with the same technician."""
        if not self.status.can_be_cancelled():
            raise InvalidStateError(
                f"Cannot reschedule appointment with status '{self.status.value}'"
            )
        self.scheduled_date = scheduled_date
        self.time_slot = AppointmentTimeSlot(time_slot)
        if notes is not None:
            self.notes = notes
        self.updated_at = datetime.now(timezone.utc)

    def mark_completed(self) -> None:
        """Mark the visit as done."""
        if self.status == AppointmentStatus.CANCELLED:
            raise InvalidStateError("Cannot complete a cancelled appointment")
        self.status = AppointmentStatus.COMPLETED
        self.updated_at = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        """Convert appointment to dictionary."""
        return {
            "id": str(self.id),
            "repair_request_id": str(self.repair_request_id),
            "technician_id": str(self.technician_id),
            "user_id": self.user_id,
            "scheduled_date": self.scheduled_date.isoformat(),
            "time_slot": self.time_slot.value,
            "address": self.address.to_dict(),
            "notes": self.notes,
            "status": self.status.value,
            "cancellation_reason": self.cancellation_reason,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
