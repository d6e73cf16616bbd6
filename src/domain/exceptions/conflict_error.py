"""
Scheduling conflict domain exceptions.
"""

from datetime import date

from .base import RepairDomainError


class ConflictError(RepairDomainError):
    """Raised when a technician or slot combination is unavailable."""

    error_type = "conflict"


class TechnicianUnavailableError(ConflictError):
    """Raised when a technician has no open slot at all."""

    def __init__(self, technician_id):
        self.technician_id = str(technician_id)
        super().__init__(f"Technician {technician_id} is not available")


class SlotTakenError(ConflictError):
    """Raised when a (technician, date, slot) triple is already booked."""

    def __init__(self, technician_id, scheduled_date: date, time_slot: str):
        self.technician_id = str(technician_id)
        self.scheduled_date = scheduled_date
        self.time_slot = time_slot
        super().__init__(
            f"Time slot {time_slot} on {scheduled_date.isoformat()} "
            f"is not available for technician {technician_id}"
        )
