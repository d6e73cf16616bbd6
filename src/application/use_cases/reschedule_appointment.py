"""Reschedule appointment use case."""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union
from uuid import UUID

from src.application.interfaces.repositories import (
    AppointmentRepositoryInterface,
    AvailabilityRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.cancellation_policy import CancellationPolicy
from src.application.services.clock import Clock, utc_now
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.services.validators import parse_choice
from src.config.logging import get_logger
from src.domain.entities.appointment import Appointment
from src.domain.exceptions.conflict_error import SlotTakenError
from src.domain.exceptions.not_found_error import AppointmentNotFoundError
from src.domain.exceptions.validation_error import PastScheduleError, ValidationError
from src.domain.value_objects.notification_kind import NotificationKind
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from src.infrastructure.monitoring.metrics import (
    record_appointment_rescheduled,
    record_slot_conflict,
)

logger = get_logger(__name__)


@dataclass
class RescheduleAppointmentRequest:
    """Request for moving an appointment to another slot."""

    appointment_id: UUID
    user_id: str
    new_date: date
    new_time_slot: Union[AppointmentTimeSlot, str]
    notes: Optional[str] = None


class RescheduleAppointmentUseCase:
    """Move a booked visit to another slot of the same technician."""

    def __init__(
        self,
        appointment_repo: AppointmentRepositoryInterface,
        availability_repo: AvailabilityRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        notifier: NotificationDispatcher,
        policy: CancellationPolicy,
        clock: Clock = utc_now,
    ):
        self.appointment_repo = appointment_repo
        self.availability_repo = availability_repo
        self.transaction_service = transaction_service
        self.notifier = notifier
        self.policy = policy
        self.clock = clock

    async def execute(self, request: RescheduleAppointmentRequest) -> Appointment:
        logger.info(
            "Rescheduling appointment",
            appointment_id=str(request.appointment_id),
            new_date=request.new_date.isoformat(),
            new_time_slot=str(request.new_time_slot),
            user_id=request.user_id,
        )

        new_slot = parse_choice(
            AppointmentTimeSlot, request.new_time_slot, "new_time_slot"
        )

        appointment = await self.appointment_repo.get_by_id(request.appointment_id)
        if not appointment:
            raise AppointmentNotFoundError(request.appointment_id)

        now = self.clock()
        # Giving up the old slot is subject to the same rules as cancelling it.
        self.policy.ensure_can_cancel(appointment, request.user_id, now)

        if (
            appointment.scheduled_date == request.new_date
            and appointment.time_slot == new_slot
        ):
            raise ValidationError("Appointment is already booked for that slot")

        technician_id = appointment.technician_id
        is_open = await self.availability_repo.check_time_slot_availability(
            technician_id, request.new_date, new_slot
        )
        if not is_open:
            record_slot_conflict("precheck")
            raise SlotTakenError(technician_id, request.new_date, new_slot.value)

        starts_at = new_slot.starts_at(request.new_date, self.policy.timezone_name)
        if starts_at <= now:
            raise PastScheduleError(starts_at)

        old_date, old_slot = appointment.scheduled_date, appointment.time_slot

        async def move() -> Appointment:
            if not await self.availability_repo.book_slot(
                technician_id, request.new_date, new_slot
            ):
                record_slot_conflict("booking")
                raise SlotTakenError(technician_id, request.new_date, new_slot.value)

            appointment.move_to(request.new_date, new_slot, request.notes)
            updated = await self.appointment_repo.update(appointment)
            await self.availability_repo.release_slot(technician_id, old_date, old_slot)
            return updated

        updated = await self.transaction_service.execute_in_transaction(move)
        record_appointment_rescheduled()

        logger.info(
            "Appointment rescheduled",
            appointment_id=str(updated.id),
            old_date=old_date.isoformat(),
            old_time_slot=old_slot.value,
            new_date=updated.scheduled_date.isoformat(),
            new_time_slot=updated.time_slot.value,
        )

        await self.notifier.notify(updated.id, NotificationKind.CONFIRMATION)
        return updated
