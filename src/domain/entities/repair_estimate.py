"""Repair estimate domain entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4


class PartAvailability(str, Enum):
    """Whether a part can be fitted right away."""

    IN_STOCK = "in_stock"
    ORDER_REQUIRED = "order_required"


@dataclass(frozen=True)
class PartNeeded:
    """A spare part listed on an estimate."""

    name: str
    cost: float
    availability: PartAvailability = PartAvailability.IN_STOCK

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "cost": self.cost,
            "availability": PartAvailability(self.availability).value,
        }


@dataclass
class RepairEstimate:
    """Technician quote for a repair request."""

    repair_request_id: UUID
    technician_id: UUID
    estimated_cost: float
    estimated_duration_hours: float
    labor_cost: float
    valid_until: datetime
    parts_needed: List[PartNeeded] = field(default_factory=list)
    notes: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate estimate figures."""
        if self.estimated_cost < 0:
            raise ValueError("Estimated cost cannot be negative")
        if self.labor_cost < 0:
            raise ValueError("Labor cost cannot be negative")
        if self.estimated_duration_hours <= 0:
            raise ValueError("Estimated duration must be positive")
        if any(part.cost < 0 for part in self.parts_needed):
            raise ValueError("Part cost cannot be negative")

        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)

    @property
    def parts_cost(self) -> float:
        """Sum of listed parts."""
        return sum(part.cost for part in self.parts_needed)

    def is_valid_at(self, moment: datetime) -> bool:
        """Check if the quote has not expired."""
        return moment <= self.valid_until

    def to_dict(self) -> dict:
        """Convert estimate to dictionary."""
        return {
            "id": str(self.id),
            "repair_request_id": str(self.repair_request_id),
            "technician_id": str(self.technician_id),
            "estimated_cost": self.estimated_cost,
            "estimated_duration_hours": self.estimated_duration_hours,
            "labor_cost": self.labor_cost,
            "parts_needed": [part.to_dict() for part in self.parts_needed],
            "notes": self.notes,
            "valid_until": self.valid_until.isoformat(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
