"""Appointment API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from src.api.dependencies import (
    AppointmentRepositoryDep,
    AvailabilityRepositoryDep,
    CancellationPolicyDep,
    ClockDep,
    CurrentUserDep,
    NotificationDispatcherDep,
    RepairRequestRepositoryDep,
    TechnicianRepositoryDep,
    TransactionServiceDep,
)
from src.api.schemas.appointment import (
    AppointmentCreateRequest,
    AppointmentResponse,
    CancelAppointmentBody,
    RescheduleAppointmentBody,
)
from src.application.use_cases.cancel_appointment import (
    CancelAppointmentRequest,
    CancelAppointmentUseCase,
)
from src.application.use_cases.get_appointments import (
    GetAppointmentUseCase,
    GetUserAppointmentsUseCase,
)
from src.application.use_cases.reschedule_appointment import (
    RescheduleAppointmentRequest,
    RescheduleAppointmentUseCase,
)
from src.application.use_cases.schedule_appointment import (
    ScheduleAppointmentRequest,
    ScheduleAppointmentUseCase,
)
from src.config.settings import settings

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def schedule_appointment(
    body: AppointmentCreateRequest,
    user_id: CurrentUserDep,
    repair_request_repository: RepairRequestRepositoryDep,
    technician_repository: TechnicianRepositoryDep,
    appointment_repository: AppointmentRepositoryDep,
    availability_repository: AvailabilityRepositoryDep,
    transaction_service: TransactionServiceDep,
    notifier: NotificationDispatcherDep,
    clock: ClockDep,
):
    """Book a technician visit for a pending repair request."""
    use_case = ScheduleAppointmentUseCase(
        repair_request_repo=repair_request_repository,
        technician_repo=technician_repository,
        appointment_repo=appointment_repository,
        availability_repo=availability_repository,
        transaction_service=transaction_service,
        notifier=notifier,
        timezone_name=settings.SCHEDULING_TIMEZONE,
        clock=clock,
    )
    appointment = await use_case.execute(
        ScheduleAppointmentRequest(
            repair_request_id=body.repair_request_id,
            user_id=user_id,
            technician_id=body.technician_id,
            scheduled_date=body.scheduled_date,
            time_slot=body.time_slot,
            address=body.address.to_domain(),
            notes=body.notes,
        )
    )
    return AppointmentResponse.model_validate(appointment)


@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(
    user_id: CurrentUserDep,
    appointment_repository: AppointmentRepositoryDep,
):
    """List the caller's appointments."""
    appointments = await GetUserAppointmentsUseCase(appointment_repository).execute(
        user_id
    )
    return [AppointmentResponse.model_validate(item) for item in appointments]


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: UUID,
    user_id: CurrentUserDep,
    appointment_repository: AppointmentRepositoryDep,
):
    """Get one of the caller's appointments."""
    appointment = await GetAppointmentUseCase(appointment_repository).execute(
        appointment_id, user_id
    )
    return AppointmentResponse.model_validate(appointment)


@router.post("/{appointment_id}/cancel", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: UUID,
    body: CancelAppointmentBody,
    user_id: CurrentUserDep,
    appointment_repository: AppointmentRepositoryDep,
    repair_request_repository: RepairRequestRepositoryDep,
    availability_repository: AvailabilityRepositoryDep,
    transaction_service: TransactionServiceDep,
    notifier: NotificationDispatcherDep,
    policy: CancellationPolicyDep,
    clock: ClockDep,
):
    """Cancel an appointment outside the cutoff window."""
    use_case = CancelAppointmentUseCase(
        appointment_repo=appointment_repository,
        repair_request_repo=repair_request_repository,
        availability_repo=availability_repository,
        transaction_service=transaction_service,
        notifier=notifier,
        policy=policy,
        clock=clock,
    )
    appointment = await use_case.execute(
        CancelAppointmentRequest(
            appointment_id=appointment_id, user_id=user_id, reason=body.reason
        )
    )
    return AppointmentResponse.model_validate(appointment)


@router.post("/{appointment_id}/reschedule", response_model=AppointmentResponse)
async def reschedule_appointment(
    appointment_id: UUID,
    body: RescheduleAppointmentBody,
    user_id: CurrentUserDep,
    appointment_repository: AppointmentRepositoryDep,
    availability_repository: AvailabilityRepositoryDep,
    transaction_service: TransactionServiceDep,
    notifier: NotificationDispatcherDep,
    policy: CancellationPolicyDep,
    clock: ClockDep,
):
    """Move an appointment to another slot of the same technician."""
    use_case = RescheduleAppointmentUseCase(
        appointment_repo=appointment_repository,
        availability_repo=availability_repository,
        transaction_service=transaction_service,
        notifier=notifier,
        policy=policy,
        clock=clock,
    )
    appointment = await use_case.execute(
        RescheduleAppointmentRequest(
            appointment_id=appointment_id,
            user_id=user_id,
            new_date=body.new_date,
            new_time_slot=body.new_time_slot,
            notes=body.notes,
        )
    )
    return AppointmentResponse.model_validate(appointment)
