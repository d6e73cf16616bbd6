"""Cancel repair request use case."""

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
from src.application.use_cases.get_repair_request import load_owned_repair_request
from src.config.logging import get_logger
from src.domain.entities.appointment import Appointment
from src.domain.entities.repair_request import RepairRequest
from src.domain.exceptions.state_error import InvalidStatusTransitionError
from src.domain.value_objects.notification_kind import NotificationKind
from src.domain.value_objects.repair_status import RepairStatus
from src.infrastructure.monitoring.metrics import record_appointment_cancelled

logger = get_logger(__name__)


@dataclass
class CancelRepairRequestRequest:
    """Request for cancelling a repair request outright."""

    repair_request_id: UUID
    user_id: str
    reason: Optional[str] = None


class CancelRepairRequestUseCase:
    """
    Terminally cancel a repair request.

    A confirmed request gives up its appointment in the same transaction,
    under the same cutoff rule as a direct appointment cancellation.
    """

    def __init__(
        self,
        repair_request_repo: RepairRequestRepositoryInterface,
        appointment_repo: AppointmentRepositoryInterface,
        availability_repo: AvailabilityRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        notifier: NotificationDispatcher,
        policy: CancellationPolicy,
        clock: Clock = utc_now,
    ):
        self.repair_request_repo = repair_request_repo
        self.appointment_repo = appointment_repo
        self.availability_repo = availability_repo
        self.transaction_service = transaction_service
        self.notifier = notifier
        self.policy = policy
        self.clock = clock

    async def execute(self, request: CancelRepairRequestRequest) -> RepairRequest:
        logger.info(
            "Cancelling repair request",
            repair_request_id=str(request.repair_request_id),
            user_id=request.user_id,
        )

        repair_request = await load_owned_repair_request(
            self.repair_request_repo, request.repair_request_id, request.user_id
        )

        if not repair_request.status.can_be_cancelled():
            raise InvalidStatusTransitionError(
                "Repair request",
                repair_request.status.value,
                RepairStatus.CANCELLED.value,
            )

        appointment: Optional[Appointment] = None
        if (
            repair_request.status == RepairStatus.CONFIRMED
            and repair_request.appointment_id
        ):
            appointment = await self.appointment_repo.get_by_id(
                repair_request.appointment_id
            )
            if appointment and appointment.is_active:
                self.policy.ensure_can_cancel(
                    appointment, request.user_id, self.clock()
                )
            else:
                appointment = None

        async def cancel() -> RepairRequest:
            if appointment:
                await self.appointment_repo.cancel(appointment.id, request.reason)
                await self.availability_repo.release_slot(
                    appointment.technician_id,
                    appointment.scheduled_date,
                    appointment.time_slot,
                )
            repair_request.cancel()
            return await self.repair_request_repo.update(repair_request)

        cancelled = await self.transaction_service.execute_in_transaction(cancel)

        logger.info(
            "Repair request cancelled",
            repair_request_id=str(cancelled.id),
            released_appointment_id=str(appointment.id) if appointment else None,
        )

        if appointment:
            record_appointment_cancelled("request_cancelled")
            await self.notifier.notify(appointment.id, NotificationKind.CANCELLATION)
        return cancelled
