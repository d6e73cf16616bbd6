"""Repair request API endpoints."""

from datetime import datetime, timezone
from typing import List
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.api.dependencies import (
    AppointmentRepositoryDep,
    AvailabilityRepositoryDep,
    CancellationPolicyDep,
    ClockDep,
    CurrentUserDep,
    EstimateRepositoryDep,
    NotificationDispatcherDep,
    PricingTableDep,
    RepairRequestRepositoryDep,
    TechnicianMatcherDep,
    TransactionServiceDep,
)
from src.api.schemas.estimate import EstimateResponse
from src.api.schemas.repair import (
    AutoScheduleRequest,
    AutoScheduleResponse,
    CancelRepairRequestBody,
    CompleteRepairBody,
    CostEstimateResponse,
    CostRangeResponse,
    RepairRequestCreateRequest,
    RepairRequestResponse,
    RepairRequestUpdateRequest,
    StartRepairBody,
)
from src.application.use_cases.cancel_repair_request import (
    CancelRepairRequestRequest,
    CancelRepairRequestUseCase,
)
from src.application.use_cases.create_repair_request import (
    CreateRepairRequestRequest,
    CreateRepairRequestUseCase,
)
from src.application.use_cases.get_repair_request import (
    GetRepairRequestUseCase,
    ListUserRepairRequestsUseCase,
)
from src.application.use_cases.repair_estimates import ListEstimatesUseCase
from src.application.use_cases.schedule_repair import (
    ScheduleRepairRequest,
    ScheduleRepairUseCase,
)
from src.application.use_cases.update_repair_request import (
    UpdateRepairRequestRequest,
    UpdateRepairRequestUseCase,
)
from src.application.use_cases.update_repair_status import (
    CompleteRepairRequest,
    CompleteRepairUseCase,
    StartRepairUseCase,
)
from src.config.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/repairs", tags=["repairs"])


@router.post(
    "/requests",
    response_model=RepairRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_repair_request(
    body: RepairRequestCreateRequest,
    user_id: CurrentUserDep,
    repair_request_repository: RepairRequestRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    """Open a new repair request."""
    use_case = CreateRepairRequestUseCase(
        repair_request_repo=repair_request_repository,
        transaction_service=transaction_service,
    )
    repair_request = await use_case.execute(
        CreateRepairRequestRequest(
            user_id=user_id,
            device_type=body.device_type,
            device_brand=body.device_brand,
            device_model=body.device_model,
            issue_description=body.issue_description,
            urgency_level=body.urgency_level,
        )
    )
    return RepairRequestResponse.model_validate(repair_request)


@router.post(
    "/requests/auto-schedule",
    response_model=AutoScheduleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def auto_schedule_repair(
    body: AutoScheduleRequest,
    user_id: CurrentUserDep,
    repair_request_repository: RepairRequestRepositoryDep,
    matcher: TechnicianMatcherDep,
    pricing_table: PricingTableDep,
    transaction_service: TransactionServiceDep,
):
    """Open a priced repair request with a suggested technician."""
    use_case = ScheduleRepairUseCase(
        repair_request_repo=repair_request_repository,
        matcher=matcher,
        pricing_table=pricing_table,
        transaction_service=transaction_service,
    )
    result = await use_case.execute(
        ScheduleRepairRequest(
            user_id=user_id,
            device_type=body.device_type,
            device_brand=body.device_brand,
            device_model=body.device_model,
            issue_description=body.issue_description,
            urgency_level=body.urgency_level,
            specialty=body.specialty,
            region=body.region,
            city=body.city,
            issue_type=body.issue_type,
        )
    )
    return AutoScheduleResponse(
        repair_request=RepairRequestResponse.model_validate(result.repair_request),
        cost_range=CostRangeResponse.model_validate(result.cost_range),
        suggested_technician_id=(
            result.suggested_technician.id if result.suggested_technician else None
        ),
    )


@router.get("/requests", response_model=List[RepairRequestResponse])
async def list_repair_requests(
    user_id: CurrentUserDep,
    repair_request_repository: RepairRequestRepositoryDep,
):
    """List the caller's repair requests."""
    use_case = ListUserRepairRequestsUseCase(repair_request_repository)
    repair_requests = await use_case.execute(user_id)
    return [RepairRequestResponse.model_validate(item) for item in repair_requests]


@router.get("/requests/{repair_request_id}", response_model=RepairRequestResponse)
async def get_repair_request(
    repair_request_id: UUID,
    user_id: CurrentUserDep,
    repair_request_repository: RepairRequestRepositoryDep,
):
    """Get one of the caller's repair requests."""
    use_case = GetRepairRequestUseCase(repair_request_repository)
    repair_request = await use_case.execute(repair_request_id, user_id)
    return RepairRequestResponse.model_validate(repair_request)


@router.patch("/requests/{repair_request_id}", response_model=RepairRequestResponse)
async def update_repair_request(
    repair_request_id: UUID,
    body: RepairRequestUpdateRequest,
    user_id: CurrentUserDep,
    repair_request_repository: RepairRequestRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    """Edit a pending repair request."""
    use_case = UpdateRepairRequestUseCase(
        repair_request_repo=repair_request_repository,
        transaction_service=transaction_service,
    )
    repair_request = await use_case.execute(
        UpdateRepairRequestRequest(
            repair_request_id=repair_request_id,
            user_id=user_id,
            **body.model_dump(exclude_unset=True),
        )
    )
    return RepairRequestResponse.model_validate(repair_request)


@router.post(
    "/requests/{repair_request_id}/cancel", response_model=RepairRequestResponse
)
async def cancel_repair_request(
    repair_request_id: UUID,
    body: CancelRepairRequestBody,
    user_id: CurrentUserDep,
    repair_request_repository: RepairRequestRepositoryDep,
    appointment_repository: AppointmentRepositoryDep,
    availability_repository: AvailabilityRepositoryDep,
    transaction_service: TransactionServiceDep,
    notifier: NotificationDispatcherDep,
    policy: CancellationPolicyDep,
    clock: ClockDep,
):
    """Cancel a repair request, releasing its appointment if any."""
    use_case = CancelRepairRequestUseCase(
        repair_request_repo=repair_request_repository,
        appointment_repo=appointment_repository,
        availability_repo=availability_repository,
        transaction_service=transaction_service,
        notifier=notifier,
        policy=policy,
        clock=clock,
    )
    repair_request = await use_case.execute(
        CancelRepairRequestRequest(
            repair_request_id=repair_request_id, user_id=user_id, reason=body.reason
        )
    )
    return RepairRequestResponse.model_validate(repair_request)


@router.post(
    "/requests/{repair_request_id}/start", response_model=RepairRequestResponse
)
async def start_repair(
    repair_request_id: UUID,
    body: StartRepairBody,
    repair_request_repository: RepairRequestRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    """Assigned technician starts the repair."""
    use_case = StartRepairUseCase(
        repair_request_repo=repair_request_repository,
        transaction_service=transaction_service,
    )
    repair_request = await use_case.execute(repair_request_id, body.technician_id)
    return RepairRequestResponse.model_validate(repair_request)


@router.post(
    "/requests/{repair_request_id}/complete", response_model=RepairRequestResponse
)
async def complete_repair(
    repair_request_id: UUID,
    body: CompleteRepairBody,
    repair_request_repository: RepairRequestRepositoryDep,
    appointment_repository: AppointmentRepositoryDep,
    transaction_service: TransactionServiceDep,
):
    """Assigned technician completes the repair."""
    use_case = CompleteRepairUseCase(
        repair_request_repo=repair_request_repository,
        appointment_repo=appointment_repository,
        transaction_service=transaction_service,
    )
    repair_request = await use_case.execute(
        CompleteRepairRequest(
            repair_request_id=repair_request_id,
            technician_id=body.technician_id,
            actual_cost=body.actual_cost,
        )
    )
    return RepairRequestResponse.model_validate(repair_request)


@router.get(
    "/requests/{repair_request_id}/estimates", response_model=List[EstimateResponse]
)
async def list_repair_estimates(
    repair_request_id: UUID,
    user_id: CurrentUserDep,
    estimate_repository: EstimateRepositoryDep,
    repair_request_repository: RepairRequestRepositoryDep,
):
    """List quotes on one of the caller's repair requests."""
    use_case = ListEstimatesUseCase(
        estimate_repo=estimate_repository,
        repair_request_repo=repair_request_repository,
    )
    estimates = await use_case.execute(repair_request_id, user_id)
    return [EstimateResponse.model_validate(estimate) for estimate in estimates]


@router.get("/cost-estimate", response_model=CostEstimateResponse)
async def get_cost_estimate(
    pricing_table: PricingTableDep,
    device_type: str = Query(..., min_length=1),
    issue_type: str = Query(..., min_length=1),
):
    """Static price bracket for a device and issue."""
    cost_range = pricing_table.calculate_repair_cost(device_type, issue_type)
    return CostEstimateResponse(
        device_type=device_type,
        issue_type=issue_type,
        min=cost_range.min,
        max=cost_range.max,
        estimated_cost=cost_range.midpoint,
        calculated_at=datetime.now(timezone.utc),
    )
