"""
Repair request status value object.
"""

from enum import Enum


class RepairStatus(str, Enum):
    """Repair request status enumeration."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def is_final(self) -> bool:
        """Check if status is terminal (no more transitions)."""
        return self in [self.COMPLETED, self.CANCELLED]

    def can_transition_to(self, target: "RepairStatus") -> bool:
        """Check if the lifecycle allows moving from this status to target."""
        return target in _ALLOWED_TRANSITIONS[self]

    def can_be_scheduled(self) -> bool:
        """Check if an appointment may be booked for a request in this status."""
        return self == self.PENDING

    def can_be_cancelled(self) -> bool:
        """Check if the request itself may be cancelled."""
        return not self.is_final()


_ALLOWED_TRANSITIONS = {
    RepairStatus.PENDING: {RepairStatus.CONFIRMED, RepairStatus.CANCELLED},
    RepairStatus.CONFIRMED: {
        RepairStatus.PENDING,
        RepairStatus.IN_PROGRESS,
        RepairStatus.CANCELLED,
    },
    RepairStatus.IN_PROGRESS: {RepairStatus.COMPLETED, RepairStatus.CANCELLED},
    RepairStatus.COMPLETED: set(),
    RepairStatus.CANCELLED: set(),
}
