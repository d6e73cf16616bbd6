"""
Availability calendar SQLAlchemy models.
"""

from sqlalchemy import Column, Date, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class CalendarDayModel(BaseModel):
    """
    A (technician, date) whose calendar has been written.

    Without this row every slot of the day counts as open; with it, only
    the slots in technician_availability_slots do.
    """

    __tablename__ = "technician_calendar_days"
    __table_args__ = (
        UniqueConstraint(
            "technician_id", "calendar_date", name="uq_calendar_day_technician_date"
        ),
    )

    technician_id = Column(
        Uuid, ForeignKey("technicians.id"), nullable=False, index=True
    )
    calendar_date = Column(Date, nullable=False)

    technician = relationship("TechnicianModel", back_populates="calendar_days")

    def __repr__(self) -> str:
        return (
            f"<CalendarDay(technician_id={self.technician_id}, "
            f"date={self.calendar_date})>"
        )


class AvailabilitySlotModel(BaseModel):
    """One open (technician, date, time slot); booking deletes the row."""

    __tablename__ = "technician_availability_slots"
    __table_args__ = (
        UniqueConstraint(
            "technician_id",
            "available_date",
            "time_slot",
            name="uq_availability_technician_date_slot",
        ),
    )

    technician_id = Column(
        Uuid, ForeignKey("technicians.id"), nullable=False, index=True
    )
    available_date = Column(Date, nullable=False, index=True)
    time_slot = Column(String(20), nullable=False)

    # Relationships
    technician = relationship("TechnicianModel", back_populates="availability_slots")

    def __repr__(self) -> str:
        return (
            f"<AvailabilitySlot(technician_id={self.technician_id}, "
            f"date={self.available_date}, slot={self.time_slot})>"
        )
