"""
Domain value objects package.
"""

from .address import Address
from .appointment_status import AppointmentStatus
from .device import DeviceInfo
from .location import Location
from .notification_kind import NotificationKind
from .repair_status import RepairStatus
from .technician_specialty import TechnicianSpecialty
from .time_slot import AppointmentTimeSlot
from .urgency_level import UrgencyLevel

__all__ = [
    "Address",
    "AppointmentStatus",
    "AppointmentTimeSlot",
    "DeviceInfo",
    "Location",
    "NotificationKind",
    "RepairStatus",
    "TechnicianSpecialty",
    "UrgencyLevel",
]
