"""
Technician SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, Float, String
from sqlalchemy.orm import relationship

from .base import BaseModel


class TechnicianModel(BaseModel):
    """Technician database model."""

    __tablename__ = "technicians"

    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(30))
    specialties = Column(JSON, nullable=False)  # list of specialty values
    rating = Column(Float, nullable=False, default=0.0)

    # Service area
    region = Column(String(100), nullable=False, index=True)
    city = Column(String(100))
    commune = Column(String(100))

    # Relationships
    availability_slots = relationship(
        "AvailabilitySlotModel",
        back_populates="technician",
        cascade="all, delete-orphan",
    )
    calendar_days = relationship(
        "CalendarDayModel",
        back_populates="technician",
        cascade="all, delete-orphan",
    )
    appointments = relationship("AppointmentModel", back_populates="technician")

    def __repr__(self) -> str:
        return f"<Technician(id={self.id}, name={self.name}, region={self.region})>"
