"""Update repair request use case."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.application.interfaces.repositories import RepairRequestRepositoryInterface
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.validators import parse_choice, require_text
from src.application.use_cases.get_repair_request import load_owned_repair_request
from src.config.logging import get_logger
from src.domain.entities.repair_request import RepairRequest
from src.domain.value_objects.device import DeviceInfo
from src.domain.value_objects.urgency_level import UrgencyLevel

logger = get_logger(__name__)


@dataclass
class UpdateRepairRequestRequest:
    """Partial update of customer-provided details; None means unchanged."""

    repair_request_id: UUID
    user_id: str
    device_type: Optional[str] = None
    device_brand: Optional[str] = None
    device_model: Optional[str] = None
    issue_description: Optional[str] = None
    urgency_level: Optional[str] = None


class UpdateRepairRequestUseCase:
    """Edit a pending repair request."""

    def __init__(
        self,
        repair_request_repo: RepairRequestRepositoryInterface,
        transaction_service: TransactionServiceInterface,
    ):
        self.repair_request_repo = repair_request_repo
        self.transaction_service = transaction_service

    async def execute(self, request: UpdateRepairRequestRequest) -> RepairRequest:
        logger.info(
            "Updating repair request",
            repair_request_id=str(request.repair_request_id),
            user_id=request.user_id,
        )

        repair_request = await load_owned_repair_request(
            self.repair_request_repo, request.repair_request_id, request.user_id
        )

        device = None
        if any(
            value is not None
            for value in (request.device_type, request.device_brand, request.device_model)
        ):
            current = repair_request.device
            device = DeviceInfo(
                device_type=(
                    require_text(request.device_type, "device_type")
                    if request.device_type is not None
                    else current.device_type
                ),
                brand=request.device_brand if request.device_brand is not None else current.brand,
                model=request.device_model if request.device_model is not None else current.model,
            )

        issue_description = (
            require_text(request.issue_description, "issue_description")
            if request.issue_description is not None
            else None
        )
        urgency_level = (
            parse_choice(UrgencyLevel, request.urgency_level, "urgency_level")
            if request.urgency_level is not None
            else None
        )

        repair_request.update_details(
            device=device,
            issue_description=issue_description,
            urgency_level=urgency_level,
        )

        updated = await self.transaction_service.execute_in_transaction(
            lambda: self.repair_request_repo.update(repair_request)
        )
        logger.info("Repair request updated", repair_request_id=str(updated.id))
        return updated
