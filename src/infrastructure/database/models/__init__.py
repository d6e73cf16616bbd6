"""
Database models package.
"""

from .appointment import AppointmentModel
from .availability_slot import AvailabilitySlotModel, CalendarDayModel
from .base import Base, BaseModel
from .repair_estimate import RepairEstimateModel
from .repair_request import RepairRequestModel
from .technician import TechnicianModel

__all__ = [
    "Base",
    "BaseModel",
    "AppointmentModel",
    "AvailabilitySlotModel",
    "CalendarDayModel",
    "RepairEstimateModel",
    "RepairRequestModel",
    "TechnicianModel",
]
