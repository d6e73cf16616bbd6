"""Technician-side repair status use cases."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.application.interfaces.repositories import (
    AppointmentRepositoryInterface,
    RepairRequestRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.config.logging import get_logger
from src.domain.entities.repair_request import RepairRequest
from src.domain.exceptions.authorization_error import UnauthorizedError
from src.domain.exceptions.not_found_error import RepairRequestNotFoundError
from src.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)


async def _load_assigned(
    repair_request_repo: RepairRequestRepositoryInterface,
    repair_request_id: UUID,
    technician_id: UUID,
) -> RepairRequest:
    repair_request = await repair_request_repo.get_by_id(repair_request_id)
    if not repair_request:
        raise RepairRequestNotFoundError(repair_request_id)
    if repair_request.technician_id != technician_id:
        raise UnauthorizedError("Repair request", repair_request_id, str(technician_id))
    return repair_request


class StartRepairUseCase:
    """The assigned technician starts work on a confirmed request."""

    def __init__(
        self,
        repair_request_repo: RepairRequestRepositoryInterface,
        transaction_service: TransactionServiceInterface,
    ):
        self.repair_request_repo = repair_request_repo
        self.transaction_service = transaction_service

    async def execute(self, repair_request_id: UUID, technician_id: UUID) -> RepairRequest:
        repair_request = await _load_assigned(
            self.repair_request_repo, repair_request_id, technician_id
        )
        repair_request.start_work()

        updated = await self.transaction_service.execute_in_transaction(
            lambda: self.repair_request_repo.update(repair_request)
        )
        logger.info(
            "Repair started",
            repair_request_id=str(updated.id),
            technician_id=str(technician_id),
        )
        return updated


@dataclass
class CompleteRepairRequest:
    """Request for closing a repair."""

    repair_request_id: UUID
    technician_id: UUID
    actual_cost: Optional[float] = None


class CompleteRepairUseCase:
    """The assigned technician finishes an in-progress request."""

    def __init__(
        self,
        repair_request_repo: RepairRequestRepositoryInterface,
        appointment_repo: AppointmentRepositoryInterface,
        transaction_service: TransactionServiceInterface,
    ):
        self.repair_request_repo = repair_request_repo
        self.appointment_repo = appointment_repo
        self.transaction_service = transaction_service

    async def execute(self, request: CompleteRepairRequest) -> RepairRequest:
        if request.actual_cost is not None and request.actual_cost < 0:
            raise ValidationError("Actual cost cannot be negative")

        repair_request = await _load_assigned(
            self.repair_request_repo, request.repair_request_id, request.technician_id
        )
        repair_request.complete(request.actual_cost)

        async def complete() -> RepairRequest:
            if repair_request.appointment_id:
                appointment = await self.appointment_repo.get_by_id(
                    repair_request.appointment_id
                )
                if appointment and appointment.is_active:
                    appointment.mark_completed()
                    await self.appointment_repo.update(appointment)
            return await self.repair_request_repo.update(repair_request)

        updated = await self.transaction_service.execute_in_transaction(complete)
        logger.info(
            "Repair completed",
            repair_request_id=str(updated.id),
            technician_id=str(request.technician_id),
            actual_cost=updated.actual_cost,
        )
        return updated
