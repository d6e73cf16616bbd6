"""Repair estimate use cases."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.application.interfaces.repositories import (
    RepairEstimateRepositoryInterface,
    RepairRequestRepositoryInterface,
    TechnicianRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.clock import Clock, utc_now
from src.application.services.validators import parse_choice, require_text
from src.application.use_cases.get_repair_request import load_owned_repair_request
from src.config.logging import get_logger
from src.domain.entities.repair_estimate import (
    PartAvailability,
    PartNeeded,
    RepairEstimate,
)
from src.domain.exceptions.authorization_error import UnauthorizedError
from src.domain.exceptions.not_found_error import (
    EstimateNotFoundError,
    RepairRequestNotFoundError,
    TechnicianNotFoundError,
)
from src.domain.exceptions.state_error import InvalidStateError
from src.domain.exceptions.validation_error import ValidationError

logger = get_logger(__name__)


@dataclass
class PartInput:
    """Raw part line of an estimate."""

    name: str
    cost: float
    availability: str = PartAvailability.IN_STOCK.value


@dataclass
class CreateEstimateRequest:
    """Request for quoting a repair."""

    repair_request_id: UUID
    technician_id: UUID
    estimated_cost: float
    estimated_duration_hours: float
    labor_cost: float
    valid_until: datetime
    parts_needed: List[PartInput] = field(default_factory=list)
    notes: Optional[str] = None


class CreateEstimateUseCase:
    """Attach a technician quote to a repair request and refresh its estimated cost."""

    def __init__(
        self,
        estimate_repo: RepairEstimateRepositoryInterface,
        repair_request_repo: RepairRequestRepositoryInterface,
        technician_repo: TechnicianRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        clock: Clock = utc_now,
    ):
        self.estimate_repo = estimate_repo
        self.repair_request_repo = repair_request_repo
        self.technician_repo = technician_repo
        self.transaction_service = transaction_service
        self.clock = clock

    async def execute(self, request: CreateEstimateRequest) -> RepairEstimate:
        logger.info(
            "Creating repair estimate",
            repair_request_id=str(request.repair_request_id),
            technician_id=str(request.technician_id),
            estimated_cost=request.estimated_cost,
        )

        repair_request = await self.repair_request_repo.get_by_id(
            request.repair_request_id
        )
        if not repair_request:
            raise RepairRequestNotFoundError(request.repair_request_id)
        if repair_request.status.is_final():
            raise InvalidStateError(
                f"Cannot estimate a {repair_request.status.value} repair request"
            )

        technician = await self.technician_repo.get_by_id(request.technician_id)
        if not technician:
            raise TechnicianNotFoundError(request.technician_id)

        if request.valid_until <= self.clock():
            raise ValidationError("Estimate validity must end in the future")

        parts = [
            PartNeeded(
                name=require_text(part.name, "parts_needed.name"),
                cost=part.cost,
                availability=parse_choice(
                    PartAvailability, part.availability, "parts_needed.availability"
                ),
            )
            for part in request.parts_needed
        ]

        try:
            estimate = RepairEstimate(
                repair_request_id=repair_request.id,
                technician_id=technician.id,
                estimated_cost=request.estimated_cost,
                estimated_duration_hours=request.estimated_duration_hours,
                labor_cost=request.labor_cost,
                valid_until=request.valid_until,
                parts_needed=parts,
                notes=request.notes,
            )
        except ValueError as e:
            raise ValidationError(str(e))

        async def persist() -> RepairEstimate:
            created = await self.estimate_repo.create(estimate)
            repair_request.estimated_cost = created.estimated_cost
            await self.repair_request_repo.update(repair_request)
            return created

        created = await self.transaction_service.execute_in_transaction(persist)
        logger.info(
            "Repair estimate created",
            estimate_id=str(created.id),
            repair_request_id=str(repair_request.id),
        )
        return created


class ListEstimatesUseCase:
    """List quotes of one of the caller's repair requests."""

    def __init__(
        self,
        estimate_repo: RepairEstimateRepositoryInterface,
        repair_request_repo: RepairRequestRepositoryInterface,
    ):
        self.estimate_repo = estimate_repo
        self.repair_request_repo = repair_request_repo

    async def execute(self, repair_request_id: UUID, user_id: str) -> List[RepairEstimate]:
        await load_owned_repair_request(
            self.repair_request_repo, repair_request_id, user_id
        )
        return await self.estimate_repo.get_by_repair_request_id(repair_request_id)


class GetEstimateUseCase:
    """Fetch a quote on one of the caller's repair requests."""

    def __init__(
        self,
        estimate_repo: RepairEstimateRepositoryInterface,
        repair_request_repo: RepairRequestRepositoryInterface,
    ):
        self.estimate_repo = estimate_repo
        self.repair_request_repo = repair_request_repo

    async def execute(self, estimate_id: UUID, user_id: str) -> RepairEstimate:
        estimate = await self.estimate_repo.get_by_id(estimate_id)
        if not estimate:
            raise EstimateNotFoundError(estimate_id)

        repair_request = await self.repair_request_repo.get_by_id(
            estimate.repair_request_id
        )
        if not repair_request or not repair_request.is_owned_by(user_id):
            raise UnauthorizedError("Estimate", estimate_id, user_id)
        return estimate
