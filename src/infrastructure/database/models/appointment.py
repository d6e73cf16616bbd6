"""
Appointment SQLAlchemy model.
"""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.orm import relationship

from .base import BaseModel


class AppointmentModel(BaseModel):
    """Appointment database model."""

    __tablename__ = "repair_appointments"
    __table_args__ = (
        # At most one live appointment per slot triple.
        Index(
            "uq_appointment_active_slot",
            "technician_id",
            "scheduled_date",
            "time_slot",
            unique=True,
            postgresql_where=text("status != 'cancelled'"),
            sqlite_where=text("status != 'cancelled'"),
        ),
    )

    repair_request_id = Column(
        Uuid, ForeignKey("repair_requests.id"), nullable=False, index=True
    )
    technician_id = Column(
        Uuid, ForeignKey("technicians.id"), nullable=False, index=True
    )
    user_id = Column(String(255), nullable=False, index=True)
    scheduled_date = Column(Date, nullable=False, index=True)
    time_slot = Column(String(20), nullable=False)

    # Address fields
    street = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    commune = Column(String(100), nullable=False)
    region = Column(String(100), nullable=False)
    postal_code = Column(String(20))

    notes = Column(Text)
    status = Column(String(20), nullable=False, default="scheduled", index=True)
    cancellation_reason = Column(Text)
    cancelled_at = Column(DateTime(timezone=True))

    # Relationships
    repair_request = relationship("RepairRequestModel", back_populates="appointments")
    technician = relationship("TechnicianModel", back_populates="appointments")

    def __repr__(self) -> str:
        return (
            f"<Appointment(id={self.id}, date={self.scheduled_date}, "
            f"slot={self.time_slot}, status={self.status})>"
        )
