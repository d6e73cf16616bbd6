"""
Domain package.
"""

from .entities import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "Appointment",
    "AvailabilityRecord",
    "RepairEstimate",
    "RepairRequest",
    "Technician",

    # Exceptions
    "RepairDomainError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "ConflictError",
    "InvalidStateError",

    # Value Objects
    "Address",
    "AppointmentStatus",
    "AppointmentTimeSlot",
    "DeviceInfo",
    "Location",
    "RepairStatus",
    "TechnicianSpecialty",
    "UrgencyLevel",
]
