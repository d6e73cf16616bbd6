"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from uuid import UUID

from src.domain.entities.appointment import Appointment
from src.domain.entities.repair_estimate import RepairEstimate
from src.domain.entities.repair_request import RepairRequest
from src.domain.entities.technician import Technician
from src.domain.value_objects.location import Location
from src.domain.value_objects.technician_specialty import TechnicianSpecialty
from src.domain.value_objects.time_slot import AppointmentTimeSlot


class RepairRequestRepositoryInterface(ABC):
    """Repair request repository interface."""

    @abstractmethod
    async def create(self, repair_request: RepairRequest) -> RepairRequest:
        """Create a new repair request."""
        pass

    @abstractmethod
    async def get_by_id(self, repair_request_id: UUID) -> Optional[RepairRequest]:
        """Get repair request by ID."""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> List[RepairRequest]:
        """Get all repair requests created by a user."""
        pass

    @abstractmethod
    async def update(self, repair_request: RepairRequest) -> RepairRequest:
        """Persist the current state of a repair request."""
        pass


class TechnicianRepositoryInterface(ABC):
    """Technician directory interface."""

    @abstractmethod
    async def get_by_id(self, technician_id: UUID) -> Optional[Technician]:
        """Get technician by ID, with upcoming availability loaded."""
        pass

    @abstractmethod
    async def find_available(
        self,
        specialty: Optional[TechnicianSpecialty] = None,
        location: Optional[Location] = None,
    ) -> List[Technician]:
        """
        Find technicians with at least one open upcoming slot, optionally
        narrowed to a specialty and a location.

        Order is stable (directory order) so that score ties resolve
        deterministically.
        """
        pass


class AppointmentRepositoryInterface(ABC):
    """Appointment repository interface."""

    @abstractmethod
    async def create(self, appointment: Appointment) -> Appointment:
        """
        Create a new appointment.

        Raises:
            SlotTakenError: another active appointment holds the same slot
        """
        pass

    @abstractmethod
    async def get_by_id(self, appointment_id: UUID) -> Optional[Appointment]:
        """Get appointment by ID."""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> List[Appointment]:
        """Get all appointments booked by a user."""
        pass

    @abstractmethod
    async def find_active_for_slot(
        self, technician_id: UUID, scheduled_date: date, time_slot: AppointmentTimeSlot
    ) -> Optional[Appointment]:
        """Get the non-cancelled appointment holding a slot triple, if any."""
        pass

    @abstractmethod
    async def find_by_date(self, scheduled_date: date) -> List[Appointment]:
        """Get every non-cancelled appointment on a given day."""
        pass

    @abstractmethod
    async def update(self, appointment: Appointment) -> Appointment:
        """Persist the current state of an appointment."""
        pass

    @abstractmethod
    async def cancel(
        self, appointment_id: UUID, reason: Optional[str] = None
    ) -> Appointment:
        """Soft-cancel an appointment."""
        pass


class AvailabilityRepositoryInterface(ABC):
    """Availability calendar interface.

    A day with no calendar record has every slot open; the first booking or
    release on it creates the record. Every mutation touches a single
    (technician, date, slot) entry.
    """

    @abstractmethod
    async def check_time_slot_availability(
        self, technician_id: UUID, on_date: date, time_slot: AppointmentTimeSlot
    ) -> bool:
        """Check if a slot is open and not backing an active appointment."""
        pass

    @abstractmethod
    async def book_slot(
        self, technician_id: UUID, on_date: date, time_slot: AppointmentTimeSlot
    ) -> bool:
        """
        Atomically consume an open slot.

        Returns:
            True if this caller took the slot, False if it was not open
        """
        pass

    @abstractmethod
    async def release_slot(
        self, technician_id: UUID, on_date: date, time_slot: AppointmentTimeSlot
    ) -> None:
        """Re-open a slot (no-op if already open)."""
        pass

    @abstractmethod
    async def open_slots(
        self, technician_id: UUID, on_date: date
    ) -> List[AppointmentTimeSlot]:
        """Get open slots of a day in chronological order."""
        pass

    @abstractmethod
    async def close_day(self, technician_id: UUID, on_date: date) -> int:
        """Remove every open slot of a day, returning how many were removed."""
        pass

    @abstractmethod
    async def has_open_slots(self, technician_id: UUID, from_date: date) -> bool:
        """Check if any slot is open on from_date or later."""
        pass


class RepairEstimateRepositoryInterface(ABC):
    """Repair estimate repository interface."""

    @abstractmethod
    async def create(self, estimate: RepairEstimate) -> RepairEstimate:
        """Create a new estimate."""
        pass

    @abstractmethod
    async def get_by_id(self, estimate_id: UUID) -> Optional[RepairEstimate]:
        """Get estimate by ID."""
        pass

    @abstractmethod
    async def get_by_repair_request_id(
        self, repair_request_id: UUID
    ) -> List[RepairEstimate]:
        """Get estimates attached to a repair request, newest first."""
        pass
