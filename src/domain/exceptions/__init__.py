"""
Domain exceptions package.
"""

from .authorization_error import UnauthorizedError
from .base import RepairDomainError
from .conflict_error import ConflictError, SlotTakenError, TechnicianUnavailableError
from .not_found_error import (
    AppointmentNotFoundError,
    EstimateNotFoundError,
    NotFoundError,
    RepairRequestNotFoundError,
    TechnicianNotFoundError,
)
from .state_error import (
    CancellationWindowError,
    InvalidStateError,
    InvalidStatusTransitionError,
)
from .validation_error import (
    InvalidChoiceError,
    PastScheduleError,
    RequiredFieldError,
    ValidationError,
)

__all__ = [
    "RepairDomainError",
    "NotFoundError",
    "RepairRequestNotFoundError",
    "TechnicianNotFoundError",
    "AppointmentNotFoundError",
    "EstimateNotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "RequiredFieldError",
    "InvalidChoiceError",
    "PastScheduleError",
    "ConflictError",
    "TechnicianUnavailableError",
    "SlotTakenError",
    "InvalidStateError",
    "InvalidStatusTransitionError",
    "CancellationWindowError",
]
