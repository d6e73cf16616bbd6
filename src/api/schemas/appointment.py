"""
Appointment API schemas.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.value_objects.address import Address
from src.domain.value_objects.appointment_status import AppointmentStatus
from src.domain.value_objects.time_slot import AppointmentTimeSlot

from .common import TimestampMixin


class AddressSchema(BaseModel):
    """Service address schema."""

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    commune: str = Field(..., min_length=1, max_length=100)
    region: str = Field(..., min_length=1, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)

    model_config = {"from_attributes": True}

    def to_domain(self) -> Address:
        return Address(**self.model_dump())


class AppointmentCreateRequest(BaseModel):
    """Appointment booking schema."""

    repair_request_id: UUID
    technician_id: UUID
    scheduled_date: date
    time_slot: AppointmentTimeSlot
    address: AddressSchema
    notes: Optional[str] = Field(None, max_length=2000)


class CancelAppointmentBody(BaseModel):
    """Cancellation body."""

    reason: Optional[str] = Field(None, max_length=1000)


class RescheduleAppointmentBody(BaseModel):
    """Move to another slot of the same technician."""

    new_date: date
    new_time_slot: AppointmentTimeSlot
    notes: Optional[str] = Field(None, max_length=2000)


class AppointmentResponse(TimestampMixin):
    """Appointment response schema."""

    id: UUID
    repair_request_id: UUID
    technician_id: UUID
    user_id: str
    scheduled_date: date
    time_slot: AppointmentTimeSlot
    address: AddressSchema
    notes: Optional[str] = None
    status: AppointmentStatus
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
