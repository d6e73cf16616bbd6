"""Cancel appointment use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.application.interfaces.repositories import (
    AppointmentRepositoryInterface,
    AvailabilityRepositoryInterface,
    RepairRequestRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.cancellation_policy import CancellationPolicy
from src.application.services.clock import Clock, utc_now
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.config.logging import get_logger
from src.domain.entities.appointment import Appointment
from src.domain.exceptions.not_found_error import AppointmentNotFoundError
from src.domain.value_objects.notification_kind import NotificationKind
from src.infrastructure.monitoring.metrics import record_appointment_cancelled

logger = get_logger(__name__)


@dataclass
class CancelAppointmentRequest:
    """Request for cancelling an appointment."""

    appointment_id: UUID
    user_id: str
    reason: Optional[str] = None


class CancelAppointmentUseCase:
    """Customer-initiated cancellation of a booked visit."""

    def __init__(
        self,
        appointment_repo: AppointmentRepositoryInterface,
        repair_request_repo: RepairRequestRepositoryInterface,
        availability_repo: AvailabilityRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        notifier: NotificationDispatcher,
        policy: CancellationPolicy,
        clock: Clock = utc_now,
    ):
        self.appointment_repo = appointment_repo
        self.repair_request_repo = repair_request_repo
        self.availability_repo = availability_repo
        self.transaction_service = transaction_service
        self.notifier = notifier
        self.policy = policy
        self.clock = clock

    async def execute(self, request: CancelAppointmentRequest) -> Appointment:
        """
        Cancel the appointment, release its slot and put the repair request
        back to pending.

        Raises:
            AppointmentNotFoundError: unknown appointment
            UnauthorizedError: caller did not book it
            InvalidStateError: already cancelled/completed, or inside the cutoff window
        """
        logger.info(
            "Cancelling appointment",
            appointment_id=str(request.appointment_id),
            user_id=request.user_id,
        )

        appointment = await self.appointment_repo.get_by_id(request.appointment_id)
        if not appointment:
            raise AppointmentNotFoundError(request.appointment_id)

        self.policy.ensure_can_cancel(appointment, request.user_id, self.clock())

        async def cancel() -> Appointment:
            cancelled = await self.appointment_repo.cancel(
                appointment.id, request.reason
            )

            repair_request = await self.repair_request_repo.get_by_id(
                appointment.repair_request_id
            )
            if repair_request and repair_request.appointment_id == appointment.id:
                repair_request.revert_to_pending()
                await self.repair_request_repo.update(repair_request)

            await self.availability_repo.release_slot(
                appointment.technician_id,
                appointment.scheduled_date,
                appointment.time_slot,
            )
            return cancelled

        cancelled = await self.transaction_service.execute_in_transaction(cancel)
        record_appointment_cancelled("customer")

        logger.info(
            "Appointment cancelled",
            appointment_id=str(cancelled.id),
            repair_request_id=str(cancelled.repair_request_id),
            reason=request.reason,
        )

        await self.notifier.notify(cancelled.id, NotificationKind.CANCELLATION)
        return cancelled
