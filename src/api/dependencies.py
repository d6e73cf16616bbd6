"""
FastAPI dependency injection container.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.services.cancellation_policy import CancellationPolicy
from src.application.services.clock import Clock, utc_now
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.services.repair_pricing import RepairPricingTable
from src.application.services.technician_matcher import TechnicianMatcher
from src.config.database import get_db_session
from src.config.logging import get_logger
from src.config.settings import settings
from src.infrastructure.database.repositories.appointment_repository import (
    AppointmentRepository,
)
from src.infrastructure.database.repositories.availability_repository import (
    AvailabilityRepository,
)
from src.infrastructure.database.repositories.repair_estimate_repository import (
    RepairEstimateRepository,
)
from src.infrastructure.database.repositories.repair_request_repository import (
    RepairRequestRepository,
)
from src.infrastructure.database.repositories.technician_repository import (
    TechnicianRepository,
)
from src.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)
from src.infrastructure.notifications.senders import get_notification_sender

logger = get_logger(__name__)


# Caller identity
async def get_current_user_id(request: Request) -> str:
    """Caller id forwarded by the gateway."""
    user_id = request.headers.get(settings.USER_ID_HEADER, "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {settings.USER_ID_HEADER} header",
        )
    return user_id


async def get_clock() -> Clock:
    """Get the time source."""
    return utc_now


# Database Dependencies
async def get_repair_request_repository(
    db: AsyncSession = Depends(get_db_session),
) -> RepairRequestRepository:
    """Get repair request repository instance."""
    return RepairRequestRepository(db)


async def get_technician_repository(
    db: AsyncSession = Depends(get_db_session),
    clock: Clock = Depends(get_clock),
) -> TechnicianRepository:
    """Get technician repository instance."""
    return TechnicianRepository(
        db,
        timezone_name=settings.SCHEDULING_TIMEZONE,
        lookahead_days=settings.AVAILABILITY_LOOKAHEAD_DAYS,
        clock=clock,
    )


async def get_appointment_repository(
    db: AsyncSession = Depends(get_db_session),
) -> AppointmentRepository:
    """Get appointment repository instance."""
    return AppointmentRepository(db)


async def get_availability_repository(
    db: AsyncSession = Depends(get_db_session),
) -> AvailabilityRepository:
    """Get availability repository instance."""
    return AvailabilityRepository(db)


async def get_estimate_repository(
    db: AsyncSession = Depends(get_db_session),
) -> RepairEstimateRepository:
    """Get repair estimate repository instance."""
    return RepairEstimateRepository(db)


async def get_transaction_service(
    db: AsyncSession = Depends(get_db_session),
) -> TransactionService:
    """Get transaction service instance."""
    return TransactionService(db)


# Service Dependencies
async def get_notification_dispatcher() -> NotificationDispatcher:
    """Get notification dispatcher instance."""
    return NotificationDispatcher(get_notification_sender())


async def get_cancellation_policy() -> CancellationPolicy:
    """Get cancellation policy configured from settings."""
    return CancellationPolicy(
        cutoff_hours=settings.CANCELLATION_CUTOFF_HOURS,
        timezone_name=settings.SCHEDULING_TIMEZONE,
    )


async def get_technician_matcher(
    technician_repo: TechnicianRepository = Depends(get_technician_repository),
) -> TechnicianMatcher:
    """Get technician matcher instance."""
    return TechnicianMatcher(technician_repo)


async def get_pricing_table() -> RepairPricingTable:
    """Get pricing table instance."""
    return RepairPricingTable()


# Type aliases for cleaner dependency injection
CurrentUserDep = Annotated[str, Depends(get_current_user_id)]
ClockDep = Annotated[Clock, Depends(get_clock)]
RepairRequestRepositoryDep = Annotated[
    RepairRequestRepository, Depends(get_repair_request_repository)
]
TechnicianRepositoryDep = Annotated[
    TechnicianRepository, Depends(get_technician_repository)
]
AppointmentRepositoryDep = Annotated[
    AppointmentRepository, Depends(get_appointment_repository)
]
AvailabilityRepositoryDep = Annotated[
    AvailabilityRepository, Depends(get_availability_repository)
]
EstimateRepositoryDep = Annotated[
    RepairEstimateRepository, Depends(get_estimate_repository)
]
TransactionServiceDep = Annotated[TransactionService, Depends(get_transaction_service)]
NotificationDispatcherDep = Annotated[
    NotificationDispatcher, Depends(get_notification_dispatcher)
]
CancellationPolicyDep = Annotated[CancellationPolicy, Depends(get_cancellation_policy)]
TechnicianMatcherDep = Annotated[TechnicianMatcher, Depends(get_technician_matcher)]
PricingTableDep = Annotated[RepairPricingTable, Depends(get_pricing_table)]
