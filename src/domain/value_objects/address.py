"""
Service address value object.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Address:
    """Address where an appointment takes place."""

    street: str
    city: str
    commune: str
    region: str
    postal_code: Optional[str] = None

    def __post_init__(self):
        """Validate address fields."""
        if not self.street or not self.street.strip():
            raise ValueError("Street is required")
        if not self.city or not self.city.strip():
            raise ValueError("City is required")
        if not self.commune or not self.commune.strip():
            raise ValueError("Commune is required")
        if not self.region or not self.region.strip():
            raise ValueError("Region is required")

    @property
    def full_address(self) -> str:
        """Get formatted full address."""
        parts = [self.street, self.commune, self.city, self.region]
        if self.postal_code:
            parts.append(self.postal_code)
        return ", ".join(parts)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "street": self.street,
            "city": self.city,
            "commune": self.commune,
            "region": self.region,
            "postal_code": self.postal_code,
        }
