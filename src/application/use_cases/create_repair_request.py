"""Create repair request use case."""

from dataclasses import dataclass
from typing import Optional

from src.application.interfaces.repositories import RepairRequestRepositoryInterface
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.validators import parse_choice, require_text
from src.config.logging import get_logger
from src.domain.entities.repair_request import RepairRequest
from src.domain.value_objects.device import DeviceInfo
from src.domain.value_objects.urgency_level import UrgencyLevel
from src.infrastructure.monitoring.metrics import record_repair_request_created

logger = get_logger(__name__)


@dataclass
class CreateRepairRequestRequest:
    """Request for creating a repair request."""

    user_id: str
    device_type: str
    device_brand: str
    device_model: str
    issue_description: str
    urgency_level: str


def build_repair_request(
    request: CreateRepairRequestRequest,
    estimated_cost: Optional[float] = None,
) -> RepairRequest:
    """Validate raw input and build a pending repair request."""
    user_id = require_text(request.user_id, "user_id")
    device_type = require_text(request.device_type, "device_type")
    issue_description = require_text(request.issue_description, "issue_description")
    urgency_level = parse_choice(UrgencyLevel, request.urgency_level, "urgency_level")

    return RepairRequest(
        user_id=user_id,
        device=DeviceInfo(
            device_type=device_type,
            brand=(request.device_brand or "").strip(),
            model=(request.device_model or "").strip(),
        ),
        issue_description=issue_description,
        urgency_level=urgency_level,
        estimated_cost=estimated_cost,
    )


class CreateRepairRequestUseCase:
    """Use case for opening a new repair request."""

    def __init__(
        self,
        repair_request_repo: RepairRequestRepositoryInterface,
        transaction_service: TransactionServiceInterface,
    ):
        self.repair_request_repo = repair_request_repo
        self.transaction_service = transaction_service

    async def execute(self, request: CreateRepairRequestRequest) -> RepairRequest:
        """Create a pending repair request for the caller."""
        logger.info(
            "Creating repair request",
            user_id=request.user_id,
            device_type=request.device_type,
            urgency_level=request.urgency_level,
        )

        repair_request = build_repair_request(request)

        created = await self.transaction_service.execute_in_transaction(
            lambda: self.repair_request_repo.create(repair_request)
        )
        record_repair_request_created(created.urgency_level.value)

        logger.info(
            "Repair request created",
            repair_request_id=str(created.id),
            user_id=created.user_id,
        )
        return created
