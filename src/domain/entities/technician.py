"""
Technician domain entity.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import UUID

from src.domain.entities.availability_record import AvailabilityRecord
from src.domain.value_objects.location import Location
from src.domain.value_objects.technician_specialty import TechnicianSpecialty


class Technician:
    """Technician entity representing a repair service provider."""

    def __init__(
        self,
        id: UUID,
        name: str,
        email: str,
        phone: str,
        specialties: Iterable[TechnicianSpecialty],
        rating: float,
        location: Location,
        availability: Optional[List[AvailabilityRecord]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        specialties = [TechnicianSpecialty(specialty) for specialty in specialties]
        if not specialties:
            raise ValueError("Technician must have at least one specialty")

        self.id = id
        self.name = name
        self.email = email
        self.phone = phone
        self.specialties = specialties
        self.rating = float(rating)
        self.location = location
        # Upcoming calendar days, loaded by the directory.
        self.availability = availability or []
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    @property
    def is_available(self) -> bool:
        """True iff at least one upcoming day still has an open slot."""
        return any(record.has_open_slots() for record in self.availability)

    def has_specialty(self, specialty: TechnicianSpecialty) -> bool:
        """Check if technician covers the given specialty."""
        return specialty in self.specialties

    def update_contact_info(self, phone: str, email: str) -> None:
        """Update technician contact information."""
        self.phone = phone
        self.email = email
        self.updated_at = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        """Convert technician to dictionary."""
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "specialties": [specialty.value for specialty in self.specialties],
            "rating": self.rating,
            "is_available": self.is_available,
            "location": self.location.to_dict(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
