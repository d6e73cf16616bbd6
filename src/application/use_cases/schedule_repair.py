"""Schedule repair use case: create a priced request with a suggested technician."""

from dataclasses import dataclass
from typing import Optional

from src.application.interfaces.repositories import RepairRequestRepositoryInterface
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.repair_pricing import CostRange, RepairPricingTable
from src.application.services.technician_matcher import TechnicianMatcher
from src.application.services.validators import parse_choice, require_text
from src.application.use_cases.create_repair_request import (
    CreateRepairRequestRequest,
    build_repair_request,
)
from src.config.logging import get_logger
from src.domain.entities.repair_request import RepairRequest
from src.domain.entities.technician import Technician
from src.domain.value_objects.location import Location
from src.domain.value_objects.technician_specialty import TechnicianSpecialty
from src.infrastructure.monitoring.metrics import (
    record_matcher_score,
    record_repair_request_created,
)

logger = get_logger(__name__)


@dataclass
class ScheduleRepairRequest(CreateRepairRequestRequest):
    """Repair request plus what the matcher needs."""

    specialty: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    # Falls back to the issue description, which usually lands on the device default.
    issue_type: Optional[str] = None


@dataclass
class ScheduleRepairResult:
    """Result of the auto-scheduling path."""

    repair_request: RepairRequest
    cost_range: CostRange
    suggested_technician: Optional[Technician]


class ScheduleRepairUseCase:
    """Create a repair request priced from the cost table, with a matched technician."""

    def __init__(
        self,
        repair_request_repo: RepairRequestRepositoryInterface,
        matcher: TechnicianMatcher,
        pricing_table: RepairPricingTable,
        transaction_service: TransactionServiceInterface,
    ):
        self.repair_request_repo = repair_request_repo
        self.matcher = matcher
        self.pricing_table = pricing_table
        self.transaction_service = transaction_service

    async def execute(self, request: ScheduleRepairRequest) -> ScheduleRepairResult:
        logger.info(
            "Starting repair auto-scheduling",
            user_id=request.user_id,
            device_type=request.device_type,
            specialty=request.specialty,
            region=request.region,
            city=request.city,
        )

        specialty = parse_choice(TechnicianSpecialty, request.specialty, "specialty")
        location = Location(
            region=require_text(request.region, "region"),
            city=request.city.strip() if request.city else None,
        )

        cost_range = self.pricing_table.calculate_repair_cost(
            request.device_type or "",
            request.issue_type or request.issue_description or "",
        )
        repair_request = build_repair_request(
            request, estimated_cost=cost_range.midpoint
        )

        best = await self.matcher.find_best_match(specialty, location)
        technician = best.technician if best else None
        if best:
            repair_request.suggest_technician(technician.id)
            record_matcher_score(best.score)
        else:
            logger.warning(
                "No technician available for auto-scheduled repair",
                specialty=specialty.value,
                region=location.region,
            )

        created = await self.transaction_service.execute_in_transaction(
            lambda: self.repair_request_repo.create(repair_request)
        )
        record_repair_request_created(created.urgency_level.value)

        logger.info(
            "Repair auto-scheduled",
            repair_request_id=str(created.id),
            estimated_cost=created.estimated_cost,
            technician_id=str(technician.id) if technician else None,
        )
        return ScheduleRepairResult(
            repair_request=created,
            cost_range=cost_range,
            suggested_technician=technician,
        )
