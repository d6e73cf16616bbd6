"""
State-related domain exceptions.
"""

from datetime import datetime

from .base import RepairDomainError


class InvalidStateError(RepairDomainError):
    """Raised when an operation is not permitted in the entity's current status."""

    error_type = "invalid_state"


class InvalidStatusTransitionError(InvalidStateError):
    """Raised when a status change is not part of the lifecycle."""

    def __init__(self, entity: str, current_status: str, target_status: str):
        self.entity = entity
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"{entity} cannot move from '{current_status}' to '{target_status}'"
        )


class CancellationWindowError(InvalidStateError):
    """Raised when cancelling too close to the appointment start."""

    def __init__(self, starts_at: datetime, cutoff_hours: float):
        self.starts_at = starts_at
        self.cutoff_hours = cutoff_hours
        super().__init__(
            f"Cannot change appointment less than {cutoff_hours:g} hours "
            f"before scheduled time ({starts_at.isoformat()})"
        )
