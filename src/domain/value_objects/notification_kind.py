"""
Appointment notification kind value object.
"""

from enum import Enum


class NotificationKind(str, Enum):
    """Why a customer is being notified about an appointment."""

    CONFIRMATION = "confirmation"
    REMINDER = "reminder"
    CANCELLATION = "cancellation"
