"""
Cancellation policy for booked appointments.
"""

from datetime import datetime

from src.domain.entities.appointment import Appointment
from src.domain.exceptions.authorization_error import UnauthorizedError
from src.domain.exceptions.state_error import (
    CancellationWindowError,
    InvalidStateError,
)


class CancellationPolicy:
    """Rules a customer must satisfy to give up or move an appointment."""

    def __init__(self, cutoff_hours: float = 2.0, timezone_name: str = "UTC"):
        self.cutoff_hours = cutoff_hours
        self.timezone_name = timezone_name

    def ensure_can_cancel(
        self, appointment: Appointment, user_id: str, now: datetime
    ) -> None:
        """
        Check ownership, status and the cutoff window, in that order.

        Raises:
            UnauthorizedError: caller did not book the appointment
            InvalidStateError: appointment already cancelled or completed
            CancellationWindowError: less than cutoff_hours before the visit
        """
        if not appointment.is_owned_by(user_id):
            raise UnauthorizedError("Appointment", appointment.id, user_id)

        if not appointment.status.can_be_cancelled():
            raise InvalidStateError(
                f"Cannot cancel appointment with status '{appointment.status.value}'"
            )

        if not self.is_outside_cutoff(appointment, now):
            raise CancellationWindowError(
                appointment.starts_at(self.timezone_name), self.cutoff_hours
            )

    def is_outside_cutoff(self, appointment: Appointment, now: datetime) -> bool:
        """Check that at least cutoff_hours remain before the visit starts."""
        hours_left = appointment.hours_until_start(now, self.timezone_name)
        return hours_left >= self.cutoff_hours
