"""Repair estimate API endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.api.dependencies import (
    ClockDep,
    CurrentUserDep,
    EstimateRepositoryDep,
    RepairRequestRepositoryDep,
    TechnicianRepositoryDep,
    TransactionServiceDep,
)
from src.api.schemas.estimate import EstimateCreateRequest, EstimateResponse
from src.application.use_cases.repair_estimates import (
    CreateEstimateRequest,
    CreateEstimateUseCase,
    GetEstimateUseCase,
    PartInput,
)

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.post("", response_model=EstimateResponse, status_code=status.HTTP_201_CREATED)
async def create_estimate(
    body: EstimateCreateRequest,
    estimate_repository: EstimateRepositoryDep,
    repair_request_repository: RepairRequestRepositoryDep,
    technician_repository: TechnicianRepositoryDep,
    transaction_service: TransactionServiceDep,
    clock: ClockDep,
):
    """Technician quotes a repair request."""
    use_case = CreateEstimateUseCase(
        estimate_repo=estimate_repository,
        repair_request_repo=repair_request_repository,
        technician_repo=technician_repository,
        transaction_service=transaction_service,
        clock=clock,
    )
    estimate = await use_case.execute(
        CreateEstimateRequest(
            repair_request_id=body.repair_request_id,
            technician_id=body.technician_id,
            estimated_cost=body.estimated_cost,
            estimated_duration_hours=body.estimated_duration_hours,
            labor_cost=body.labor_cost,
            valid_until=body.valid_until,
            parts_needed=[
                PartInput(
                    name=part.name, cost=part.cost, availability=part.availability
                )
                for part in body.parts_needed
            ],
            notes=body.notes,
        )
    )
    return EstimateResponse.model_validate(estimate)


@router.get("/{estimate_id}", response_model=EstimateResponse)
async def get_estimate(
    estimate_id: UUID,
    user_id: CurrentUserDep,
    estimate_repository: EstimateRepositoryDep,
    repair_request_repository: RepairRequestRepositoryDep,
):
    """Get a quote on one of the caller's repair requests."""
    use_case = GetEstimateUseCase(
        estimate_repo=estimate_repository,
        repair_request_repo=repair_request_repository,
    )
    estimate = await use_case.execute(estimate_id, user_id)
    return EstimateResponse.model_validate(estimate)
