"""
Repair estimate API schemas.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities.repair_estimate import PartAvailability


class PartSchema(BaseModel):
    """Spare part line."""

    name: str = Field(..., min_length=1, max_length=255)
    cost: float = Field(..., ge=0)
    availability: PartAvailability = PartAvailability.IN_STOCK

    model_config = {"from_attributes": True}


class EstimateCreateRequest(BaseModel):
    """Technician quote schema."""

    repair_request_id: UUID
    technician_id: UUID
    estimated_cost: float = Field(..., ge=0)
    estimated_duration_hours: float = Field(..., gt=0)
    labor_cost: float = Field(..., ge=0)
    valid_until: datetime
    parts_needed: List[PartSchema] = Field(default_factory=list)
    notes: Optional[str] = Field(None, max_length=2000)


class EstimateResponse(BaseModel):
    """Repair estimate response schema."""

    id: UUID
    repair_request_id: UUID
    technician_id: UUID
    estimated_cost: float
    estimated_duration_hours: float
    labor_cost: float
    parts_needed: List[PartSchema]
    notes: Optional[str] = None
    valid_until: datetime
    created_at: datetime

    model_config = {"from_attributes": True}
