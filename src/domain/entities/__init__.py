"""
Domain entities package.
"""

from .appointment import Appointment
from .availability_record import AvailabilityRecord
from .repair_estimate import PartAvailability, PartNeeded, RepairEstimate
from .repair_request import RepairRequest
from .technician import Technician

__all__ = [
    "Appointment",
    "AvailabilityRecord",
    "PartAvailability",
    "PartNeeded",
    "RepairEstimate",
    "RepairRequest",
    "Technician",
]
