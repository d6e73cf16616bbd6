"""
Repair request API schemas.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.value_objects.repair_status import RepairStatus
from src.domain.value_objects.technician_specialty import TechnicianSpecialty
from src.domain.value_objects.urgency_level import UrgencyLevel

from .common import TimestampMixin


class DeviceSchema(BaseModel):
    """Device schema."""

    device_type: str
    brand: str
    model: str

    model_config = {"from_attributes": True}


class RepairRequestCreateRequest(BaseModel):
    """Repair request creation schema."""

    device_type: str = Field(..., min_length=1, max_length=100)
    device_brand: str = Field("", max_length=100)
    device_model: str = Field("", max_length=100)
    issue_description: str = Field(..., min_length=1, max_length=5000)
    urgency_level: UrgencyLevel


class AutoScheduleRequest(RepairRequestCreateRequest):
    """Repair request priced from the cost table with a matched technician."""

    specialty: TechnicianSpecialty
    region: str = Field(..., min_length=1, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    issue_type: Optional[str] = Field(
        None, max_length=100, description="Pricing key, e.g. 'screen' or 'battery'"
    )


class RepairRequestUpdateRequest(BaseModel):
    """Partial update of a pending repair request."""

    device_type: Optional[str] = Field(None, min_length=1, max_length=100)
    device_brand: Optional[str] = Field(None, max_length=100)
    device_model: Optional[str] = Field(None, max_length=100)
    issue_description: Optional[str] = Field(None, min_length=1, max_length=5000)
    urgency_level: Optional[UrgencyLevel] = None


class RepairRequestResponse(TimestampMixin):
    """Repair request response schema."""

    id: UUID
    user_id: str
    device: DeviceSchema
    issue_description: str
    urgency_level: UrgencyLevel
    status: RepairStatus
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    technician_id: Optional[UUID] = None
    appointment_id: Optional[UUID] = None

    model_config = {"from_attributes": True}


class CostRangeResponse(BaseModel):
    """Price bracket schema."""

    min: int
    max: int

    model_config = {"from_attributes": True}


class AutoScheduleResponse(BaseModel):
    """Result of the auto-scheduling path."""

    repair_request: RepairRequestResponse
    cost_range: CostRangeResponse
    suggested_technician_id: Optional[UUID] = None


class CancelRepairRequestBody(BaseModel):
    """Cancellation body."""

    reason: Optional[str] = Field(None, max_length=1000)


class StartRepairBody(BaseModel):
    """Technician starting work."""

    technician_id: UUID


class CompleteRepairBody(BaseModel):
    """Technician closing the repair."""

    technician_id: UUID
    actual_cost: Optional[float] = Field(None, ge=0)


class CostEstimateResponse(BaseModel):
    """Static price bracket for a device and issue."""

    device_type: str
    issue_type: str
    min: int
    max: int
    estimated_cost: float
    calculated_at: datetime
