"""Schedule appointment use case."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union
from uuid import UUID

from src.application.interfaces.repositories import (
    AppointmentRepositoryInterface,
    AvailabilityRepositoryInterface,
    RepairRequestRepositoryInterface,
    TechnicianRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.clock import Clock, utc_now
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.services.validators import parse_choice
from src.config.logging import get_logger
from src.domain.entities.appointment import Appointment
from src.domain.exceptions.authorization_error import UnauthorizedError
from src.domain.exceptions.conflict_error import (
    SlotTakenError,
    TechnicianUnavailableError,
)
from src.domain.exceptions.not_found_error import (
    RepairRequestNotFoundError,
    TechnicianNotFoundError,
)
from src.domain.exceptions.state_error import InvalidStateError
from src.domain.exceptions.validation_error import PastScheduleError
from src.domain.value_objects.address import Address
from src.domain.value_objects.notification_kind import NotificationKind
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from src.infrastructure.monitoring.metrics import (
    record_appointment_scheduled,
    record_slot_conflict,
)

logger = get_logger(__name__)


@dataclass
class ScheduleAppointmentRequest:
    """Request for booking a technician visit."""

    repair_request_id: UUID
    user_id: str
    technician_id: UUID
    scheduled_date: date
    time_slot: Union[AppointmentTimeSlot, str]
    address: Address
    notes: Optional[str] = None


class ScheduleAppointmentUseCase:
    """
    Book a slot for a pending repair request.

    The slot is consumed, the appointment is created and the repair request
    is confirmed in a single transaction. The confirmation notification is
    sent after commit and never undoes the booking.
    """

    def __init__(
        self,
        repair_request_repo: RepairRequestRepositoryInterface,
        technician_repo: TechnicianRepositoryInterface,
        appointment_repo: AppointmentRepositoryInterface,
        availability_repo: AvailabilityRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        notifier: NotificationDispatcher,
        timezone_name: str = "UTC",
        clock: Clock = utc_now,
    ):
        self.repair_request_repo = repair_request_repo
        self.technician_repo = technician_repo
        self.appointment_repo = appointment_repo
        self.availability_repo = availability_repo
        self.transaction_service = transaction_service
        self.notifier = notifier
        self.timezone_name = timezone_name
        self.clock = clock

    async def execute(self, request: ScheduleAppointmentRequest) -> Appointment:
        """
        Book the requested slot.

        Raises:
            RepairRequestNotFoundError: unknown repair request
            UnauthorizedError: caller does not own the repair request
            InvalidStateError: repair request is not pending
            TechnicianNotFoundError: unknown technician
            TechnicianUnavailableError: technician has no open slot at all
            SlotTakenError: slot already booked or not offered
            PastScheduleError: slot starts now or earlier
        """
        logger.info(
            "Scheduling appointment",
            repair_request_id=str(request.repair_request_id),
            technician_id=str(request.technician_id),
            scheduled_date=request.scheduled_date.isoformat(),
            time_slot=str(request.time_slot),
            user_id=request.user_id,
        )

        time_slot = parse_choice(AppointmentTimeSlot, request.time_slot, "time_slot")

        # 1. Repair request must exist and belong to the caller
        repair_request = await self.repair_request_repo.get_by_id(
            request.repair_request_id
        )
        if not repair_request:
            raise RepairRequestNotFoundError(request.repair_request_id)

        if not repair_request.is_owned_by(request.user_id):
            raise UnauthorizedError(
                "Repair request", repair_request.id, request.user_id
            )

        if not repair_request.status.can_be_scheduled():
            raise InvalidStateError(
                f"Cannot schedule an appointment for a "
                f"{repair_request.status.value} repair request"
            )

        # 2. Technician must exist and have something open
        technician = await self.technician_repo.get_by_id(request.technician_id)
        if not technician:
            raise TechnicianNotFoundError(request.technician_id)

        if not technician.is_available:
            raise TechnicianUnavailableError(technician.id)

        # 3. Slot must be open
        is_open = await self.availability_repo.check_time_slot_availability(
            technician.id, request.scheduled_date, time_slot
        )
        if not is_open:
            record_slot_conflict("precheck")
            raise SlotTakenError(technician.id, request.scheduled_date, time_slot.value)

        # 4. Slot must start in the future
        starts_at = time_slot.starts_at(request.scheduled_date, self.timezone_name)
        if starts_at <= self.clock():
            raise PastScheduleError(starts_at)

        async def book() -> Appointment:
            if not await self.availability_repo.book_slot(
                technician.id, request.scheduled_date, time_slot
            ):
                record_slot_conflict("booking")
                raise SlotTakenError(
                    technician.id, request.scheduled_date, time_slot.value
                )

            appointment = await self.appointment_repo.create(
                Appointment(
                    repair_request_id=repair_request.id,
                    technician_id=technician.id,
                    user_id=request.user_id,
                    scheduled_date=request.scheduled_date,
                    time_slot=time_slot,
                    address=request.address,
                    notes=request.notes,
                )
            )

            repair_request.confirm(technician.id, appointment.id)
            await self.repair_request_repo.update(repair_request)
            return appointment

        appointment = await self.transaction_service.execute_in_transaction(book)
        record_appointment_scheduled(time_slot.value)

        logger.info(
            "Appointment scheduled",
            appointment_id=str(appointment.id),
            repair_request_id=str(repair_request.id),
            technician_id=str(technician.id),
            starts_at=starts_at.isoformat(),
        )

        await self.notifier.notify(appointment.id, NotificationKind.CONFIRMATION)
        return appointment
