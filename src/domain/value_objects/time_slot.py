"""
Appointment time slot value object.
"""

from datetime import date, datetime, time
from enum import Enum
from zoneinfo import ZoneInfo


class AppointmentTimeSlot(str, Enum):
    """One of the four fixed two-hour windows of a working day."""

    MORNING_8_10 = "08:00-10:00"
    MORNING_10_12 = "10:00-12:00"
    AFTERNOON_14_16 = "14:00-16:00"
    AFTERNOON_16_18 = "16:00-18:00"

    @property
    def start_time(self) -> time:
        """Get slot start time."""
        return time.fromisoformat(self.value.split("-")[0])

    @property
    def end_time(self) -> time:
        """Get slot end time."""
        return time.fromisoformat(self.value.split("-")[1])

    def starts_at(self, on_date: date, timezone_name: str = "UTC") -> datetime:
        """Get the aware instant at which this slot begins on a given day."""
        return datetime.combine(
            on_date, self.start_time, tzinfo=ZoneInfo(timezone_name)
        )

    @classmethod
    def ordered(cls) -> list["AppointmentTimeSlot"]:
        """Get all slots in chronological order."""
        return sorted(cls, key=lambda slot: slot.start_time)
