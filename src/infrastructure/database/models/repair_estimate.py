"""
Repair estimate SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Numeric, Text, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class RepairEstimateModel(BaseModel):
    """Repair estimate database model."""

    __tablename__ = "repair_estimates"

    repair_request_id = Column(
        Uuid, ForeignKey("repair_requests.id"), nullable=False, index=True
    )
    technician_id = Column(Uuid, ForeignKey("technicians.id"), nullable=False)
    estimated_cost = Column(Numeric(12, 2), nullable=False)
    estimated_duration_hours = Column(Float, nullable=False)
    labor_cost = Column(Numeric(12, 2), nullable=False)
    parts_needed = Column(JSON, nullable=False, default=list)  # [{name, cost, availability}]
    notes = Column(Text)
    valid_until = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    repair_request = relationship("RepairRequestModel", back_populates="estimates")

    def __repr__(self) -> str:
        return f"<RepairEstimate(id={self.id}, repair_request_id={self.repair_request_id})>"
