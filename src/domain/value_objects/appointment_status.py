"""
Appointment status value object.
"""

from enum import Enum


class AppointmentStatus(str, Enum):
    """Appointment status enumeration."""

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def is_active(self) -> bool:
        """Check if the appointment still holds its slot."""
        return self != self.CANCELLED

    def can_be_cancelled(self) -> bool:
        """Check if status allows cancellation."""
        return self not in [self.CANCELLED, self.COMPLETED]
