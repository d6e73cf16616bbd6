"""Repair request domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from src.domain.exceptions.state_error import (
    InvalidStateError,
    InvalidStatusTransitionError,
)
from src.domain.value_objects.device import DeviceInfo
from src.domain.value_objects.repair_status import RepairStatus
from src.domain.value_objects.urgency_level import UrgencyLevel


@dataclass
class RepairRequest:
    """Repair request domain entity."""

    user_id: str
    device: DeviceInfo
    issue_description: str
    urgency_level: UrgencyLevel
    id: UUID = field(default_factory=uuid4)
    status: RepairStatus = RepairStatus.PENDING
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    technician_id: Optional[UUID] = None
    appointment_id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate repair request data."""
        if not self.user_id or not str(self.user_id).strip():
            raise ValueError("User ID is required")
        if not self.issue_description or not self.issue_description.strip():
            raise ValueError("Issue description is required")

        self.urgency_level = UrgencyLevel(self.urgency_level)
        self.status = RepairStatus(self.status)

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = datetime.now(timezone.utc)

    def is_owned_by(self, user_id: str) -> bool:
        """Check if the given user created this request."""
        return self.user_id == user_id

    @property
    def has_active_appointment(self) -> bool:
        """Check if an appointment currently backs this request."""
        return self.appointment_id is not None

    def _transition(self, target: RepairStatus) -> None:
        if not self.status.can_transition_to(target):
            raise InvalidStatusTransitionError(
                "Repair request", self.status.value, target.value
            )
        self.status = target
        self.updated_at = datetime.now(timezone.utc)

    def confirm(self, technician_id: UUID, appointment_id: UUID) -> None:
        """Attach a booked appointment and move to confirmed."""
        self._transition(RepairStatus.CONFIRMED)
        self.technician_id = technician_id
        self.appointment_id = appointment_id

    def revert_to_pending(self) -> None:
        """Detach the cancelled appointment and go back to pending."""
        self._transition(RepairStatus.PENDING)
        self.technician_id = None
        self.appointment_id = None

    def start_work(self) -> None:
        """Technician arrived and started the repair."""
        self._transition(RepairStatus.IN_PROGRESS)

    def complete(self, actual_cost: Optional[float] = None) -> None:
        """Technician finished the repair."""
        self._transition(RepairStatus.COMPLETED)
        if actual_cost is not None:
            self.actual_cost = actual_cost

    def cancel(self) -> None:
        """Cancel the request for good."""
        self._transition(RepairStatus.CANCELLED)
        self.appointment_id = None
        self.technician_id = None

    def suggest_technician(self, technician_id: UUID) -> None:
        """Record a matched technician before any appointment exists."""
        if self.status != RepairStatus.PENDING:
            raise InvalidStateError(
                f"Cannot suggest a technician for a {self.status.value} repair request"
            )
        self.technician_id = technician_id
        self.updated_at = datetime.now(timezone.utc)

    def update_details(
        self,
        device: Optional[DeviceInfo] = None,
        issue_description: Optional[str] = None,
        urgency_level: Optional[UrgencyLevel] = None,
    ) -> None:
        """Edit customer-provided details while the request is still pending."""
        if self.status != RepairStatus.PENDING:
            raise InvalidStateError(
                f"Cannot edit a {self.status.value} repair request"
            )
        if device is not None:
            self.device = device
        if issue_description is not None:
            if not issue_description.strip():
                raise ValueError("Issue description is required")
            self.issue_description = issue_description
        if urgency_level is not None:
            self.urgency_level = UrgencyLevel(urgency_level)
        self.updated_at = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        """Convert repair request to dictionary."""
        return {
            "id": str(self.id),
            "user_id": self.user_id,
            "device": self.device.to_dict(),
            "issue_description": self.issue_description,
            "urgency_level": self.urgency_level.value,
            "status": self.status.value,
            "estimated_cost": self.estimated_cost,
            "actual_cost": self.actual_cost,
            "technician_id": str(self.technician_id) if self.technician_id else None,
            "appointment_id": str(self.appointment_id) if self.appointment_id else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
