"""Technician directory and availability API endpoints."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query

from src.api.dependencies import (
    AppointmentRepositoryDep,
    AvailabilityRepositoryDep,
    ClockDep,
    TechnicianMatcherDep,
    TechnicianRepositoryDep,
    TransactionServiceDep,
)
from src.api.schemas.technician import (
    DayAvailabilityResponse,
    DayAvailabilityUpdateRequest,
    TechnicianMatchResponse,
    TechnicianResponse,
)
from src.application.use_cases.get_available_technicians import (
    FindBestTechnicianUseCase,
    GetAvailableTechniciansUseCase,
    GetTechnicianUseCase,
)
from src.application.use_cases.manage_availability import (
    GetAvailableTimeSlotsUseCase,
    SetDayAvailabilityRequest,
    SetDayAvailabilityUseCase,
)
from src.config.settings import settings

router = APIRouter(prefix="/technicians", tags=["technicians"])


@router.get("", response_model=List[TechnicianResponse])
async def list_available_technicians(
    technician_repository: TechnicianRepositoryDep,
    specialty: str = Query(...),
    region: str = Query(...),
    city: Optional[str] = Query(None),
):
    """Available technicians for a specialty in a region."""
    technicians = await GetAvailableTechniciansUseCase(technician_repository).execute(
        specialty, region, city
    )
    return [TechnicianResponse.model_validate(technician) for technician in technicians]


@router.get("/best-match", response_model=Optional[TechnicianMatchResponse])
async def best_technician_match(
    matcher: TechnicianMatcherDep,
    specialty: str = Query(...),
    region: str = Query(...),
    city: Optional[str] = Query(None),
):
    """Highest scoring available technician, or null when nobody is available."""
    best = await FindBestTechnicianUseCase(matcher).execute(specialty, region, city)
    return TechnicianMatchResponse.model_validate(best) if best else None


@router.get("/{technician_id}", response_model=TechnicianResponse)
async def get_technician(
    technician_id: UUID,
    technician_repository: TechnicianRepositoryDep,
):
    """Get a technician."""
    technician = await GetTechnicianUseCase(technician_repository).execute(
        technician_id
    )
    return TechnicianResponse.model_validate(technician)


@router.get("/{technician_id}/time-slots", response_model=DayAvailabilityResponse)
async def get_time_slots(
    technician_id: UUID,
    technician_repository: TechnicianRepositoryDep,
    availability_repository: AvailabilityRepositoryDep,
    on_date: date = Query(..., alias="date"),
):
    """Open slots of a technician on a day."""
    use_case = GetAvailableTimeSlotsUseCase(
        technician_repo=technician_repository,
        availability_repo=availability_repository,
    )
    day = await use_case.execute(technician_id, on_date)
    return DayAvailabilityResponse.model_validate(day)


@router.put("/{technician_id}/availability", response_model=DayAvailabilityResponse)
async def set_day_availability(
    technician_id: UUID,
    body: DayAvailabilityUpdateRequest,
    technician_repository: TechnicianRepositoryDep,
    availability_repository: AvailabilityRepositoryDep,
    appointment_repository: AppointmentRepositoryDep,
    transaction_service: TransactionServiceDep,
    clock: ClockDep,
):
    """Open or close a day of a technician's calendar."""
    use_case = SetDayAvailabilityUseCase(
        technician_repo=technician_repository,
        availability_repo=availability_repository,
        appointment_repo=appointment_repository,
        transaction_service=transaction_service,
        timezone_name=settings.SCHEDULING_TIMEZONE,
        clock=clock,
    )
    day = await use_case.execute(
        SetDayAvailabilityRequest(
            technician_id=technician_id,
            on_date=body.on_date,
            is_available=body.is_available,
            time_slots=body.time_slots,
        )
    )
    return DayAvailabilityResponse.model_validate(day)
