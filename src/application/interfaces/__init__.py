"""
Application interfaces package.
"""

from .repositories import (
    AppointmentRepositoryInterface,
    AvailabilityRepositoryInterface,
    RepairEstimateRepositoryInterface,
    RepairRequestRepositoryInterface,
    TechnicianRepositoryInterface,
)
from .services import NotificationSenderInterface, TransactionServiceInterface

__all__ = [
    "AppointmentRepositoryInterface",
    "AvailabilityRepositoryInterface",
    "RepairEstimateRepositoryInterface",
    "RepairRequestRepositoryInterface",
    "TechnicianRepositoryInterface",
    "NotificationSenderInterface",
    "TransactionServiceInterface",
]
