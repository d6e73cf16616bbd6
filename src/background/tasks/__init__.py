"""
Background tasks package.
"""

from .reminders import send_appointment_reminders_task

__all__ = ["send_appointment_reminders_task"]
