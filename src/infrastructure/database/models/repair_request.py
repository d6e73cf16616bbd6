"""
Repair request SQLAlchemy model.
"""

from sqlalchemy import Column, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class RepairRequestModel(BaseModel):
    """Repair request database model."""

    __tablename__ = "repair_requests"

    user_id = Column(String(255), nullable=False, index=True)

    # Device
    device_type = Column(String(100), nullable=False)
    device_brand = Column(String(100), nullable=False, default="")
    device_model = Column(String(100), nullable=False, default="")

    issue_description = Column(Text, nullable=False)
    urgency_level = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default="pending", index=True)

    estimated_cost = Column(Numeric(12, 2))
    actual_cost = Column(Numeric(12, 2))

    technician_id = Column(Uuid, ForeignKey("technicians.id"), index=True)
    # No FK: appointments already reference the request.
    appointment_id = Column(Uuid)

    # Relationships
    appointments = relationship("AppointmentModel", back_populates="repair_request")
    estimates = relationship(
        "RepairEstimateModel",
        back_populates="repair_request",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<RepairRequest(id={self.id}, status={self.status}, user_id={self.user_id})>"
