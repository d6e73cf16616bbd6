"""
Technician API schemas.
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.value_objects.technician_specialty import TechnicianSpecialty
from src.domain.value_objects.time_slot import AppointmentTimeSlot

from .common import TimestampMixin


class LocationSchema(BaseModel):
    """Technician service area."""

    region: str
    city: Optional[str] = None
    commune: Optional[str] = None

    model_config = {"from_attributes": True}


class TechnicianResponse(TimestampMixin):
    """Technician response schema."""

    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    specialties: List[TechnicianSpecialty]
    rating: float
    location: LocationSchema
    is_available: bool

    model_config = {"from_attributes": True}


class TechnicianMatchResponse(BaseModel):
    """Matcher result with its score breakdown."""

    technician: TechnicianResponse
    score: float
    specialty_match: bool
    location_match: bool

    model_config = {"from_attributes": True}


class DayAvailabilityUpdateRequest(BaseModel):
    """Open or close one day of a technician's calendar."""

    on_date: date
    is_available: bool
    time_slots: Optional[List[AppointmentTimeSlot]] = Field(
        None, description="Slots to open; all four when omitted"
    )


class DayAvailabilityResponse(BaseModel):
    """Open slots of a technician on a day."""

    technician_id: UUID
    on_date: date
    open_slots: List[AppointmentTimeSlot]

    model_config = {"from_attributes": True}
