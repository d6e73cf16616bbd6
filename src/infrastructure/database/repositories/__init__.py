"""
Database repositories package.
"""

from .appointment_repository import AppointmentRepository
from .availability_repository import AvailabilityRepository
from .repair_estimate_repository import RepairEstimateRepository
from .repair_request_repository import RepairRequestRepository
from .technician_repository import TechnicianRepository
from .transaction_repository import TransactionService

__all__ = [
    "AppointmentRepository",
    "AvailabilityRepository",
    "RepairEstimateRepository",
    "RepairRequestRepository",
    "TechnicianRepository",
    "TransactionService",
]
