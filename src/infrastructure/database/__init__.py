"""
Database package.
"""

from .models import Base
from .repositories import (
    AppointmentRepository,
    AvailabilityRepository,
    RepairEstimateRepository,
    RepairRequestRepository,
    TechnicianRepository,
    TransactionService,
)

__all__ = [
    "Base",
    "AppointmentRepository",
    "AvailabilityRepository",
    "RepairEstimateRepository",
    "RepairRequestRepository",
    "TechnicianRepository",
    "TransactionService",
]
