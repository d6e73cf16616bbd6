"""Technician availability use cases."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional
from uuid import UUID
from zoneinfo import ZoneInfo

from src.application.interfaces.repositories import (
    AppointmentRepositoryInterface,
    AvailabilityRepositoryInterface,
    TechnicianRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.clock import Clock, utc_now
from src.application.services.validators import parse_choice
from src.config.logging import get_logger
from src.domain.exceptions.not_found_error import TechnicianNotFoundError
from src.domain.exceptions.validation_error import ValidationError
from src.domain.value_objects.time_slot import AppointmentTimeSlot

logger = get_logger(__name__)


@dataclass
class SetDayAvailabilityRequest:
    """Open or close a technician's day."""

    technician_id: UUID
    on_date: date
    is_available: bool
    # Only used when opening; None means every slot of the day.
    time_slots: Optional[Iterable[str]] = None


@dataclass
class DayAvailability:
    """Open slots of a technician on one day."""

    technician_id: UUID
    on_date: date
    open_slots: List[AppointmentTimeSlot]


class SetDayAvailabilityUseCase:
    """
    Toggle a technician's availability for one day.

    Opening adds the requested slots except those backing an active
    appointment. Closing removes every open slot of the day and leaves
    booked appointments untouched.
    """

    def __init__(
        self,
        technician_repo: TechnicianRepositoryInterface,
        availability_repo: AvailabilityRepositoryInterface,
        appointment_repo: AppointmentRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        timezone_name: str = "UTC",
        clock: Clock = utc_now,
    ):
        self.technician_repo = technician_repo
        self.availability_repo = availability_repo
        self.appointment_repo = appointment_repo
        self.transaction_service = transaction_service
        self.timezone_name = timezone_name
        self.clock = clock

    async def execute(self, request: SetDayAvailabilityRequest) -> DayAvailability:
        logger.info(
            "Setting day availability",
            technician_id=str(request.technician_id),
            on_date=request.on_date.isoformat(),
            is_available=request.is_available,
        )

        today = self.clock().astimezone(ZoneInfo(self.timezone_name)).date()
        if request.on_date < today:
            raise ValidationError(
                f"Cannot change availability of a past day ({request.on_date.isoformat()})"
            )

        technician = await self.technician_repo.get_by_id(request.technician_id)
        if not technician:
            raise TechnicianNotFoundError(request.technician_id)

        if request.time_slots is None:
            slots = AppointmentTimeSlot.ordered()
        else:
            slots = [
                parse_choice(AppointmentTimeSlot, slot, "time_slots")
                for slot in request.time_slots
            ]

        async def apply() -> List[AppointmentTimeSlot]:
            if not request.is_available:
                removed = await self.availability_repo.close_day(
                    technician.id, request.on_date
                )
                logger.debug("Closed day", technician_id=str(technician.id), removed=removed)
            else:
                for slot in slots:
                    booked = await self.appointment_repo.find_active_for_slot(
                        technician.id, request.on_date, slot
                    )
                    if booked:
                        continue
                    await self.availability_repo.release_slot(
                        technician.id, request.on_date, slot
                    )
            return await self.availability_repo.open_slots(
                technician.id, request.on_date
            )

        open_slots = await self.transaction_service.execute_in_transaction(apply)

        logger.info(
            "Day availability updated",
            technician_id=str(technician.id),
            on_date=request.on_date.isoformat(),
            open_slots=[slot.value for slot in open_slots],
        )
        return DayAvailability(
            technician_id=technician.id,
            on_date=request.on_date,
            open_slots=open_slots,
        )


class GetAvailableTimeSlotsUseCase:
    """List the open slots of a technician on a day."""

    def __init__(
        self,
        technician_repo: TechnicianRepositoryInterface,
        availability_repo: AvailabilityRepositoryInterface,
    ):
        self.technician_repo = technician_repo
        self.availability_repo = availability_repo

    async def execute(self, technician_id: UUID, on_date: date) -> DayAvailability:
        technician = await self.technician_repo.get_by_id(technician_id)
        if not technician:
            raise TechnicianNotFoundError(technician_id)

        open_slots = await self.availability_repo.open_slots(technician.id, on_date)
        return DayAvailability(
            technician_id=technician.id, on_date=on_date, open_slots=open_slots
        )
