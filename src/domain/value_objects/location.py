"""
Technician location value object.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Location:
    """Where a technician operates, or where a customer wants service."""

    region: str
    city: Optional[str] = None
    commune: Optional[str] = None

    def __post_init__(self):
        """Validate location fields."""
        if not self.region or not self.region.strip():
            raise ValueError("Region is required")

    def matches(self, requested: "Location") -> bool:
        """Region must match; city too, unless the request leaves it out."""
        if self.region != requested.region:
            return False
        return not requested.city or self.city == requested.city

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "region": self.region,
            "city": self.city,
            "commune": self.commune,
        }
