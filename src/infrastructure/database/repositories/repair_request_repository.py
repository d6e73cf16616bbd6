"""Repair request repository implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import RepairRequestRepositoryInterface
from src.config.logging import get_logger
from src.domain.entities.repair_request import RepairRequest
from src.domain.exceptions.not_found_error import RepairRequestNotFoundError
from src.domain.value_objects.device import DeviceInfo
from src.infrastructure.database.models.base import as_utc
from src.infrastructure.database.models.repair_request import RepairRequestModel

logger = get_logger(__name__)


class RepairRequestRepository(RepairRequestRepositoryInterface):
    """Repair request repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, repair_request: RepairRequest) -> RepairRequest:
        """Create a new repair request."""
        model = RepairRequestModel(id=repair_request.id)
        self._apply(model, repair_request)
        model.created_at = repair_request.created_at

        self.db.add(model)
        # Flush only; the transaction service owns the commit.
        await self.db.flush()
        await self.db.refresh(model)

        return self._model_to_entity(model)

    async def get_by_id(self, repair_request_id: UUID) -> Optional[RepairRequest]:
        """Get repair request by ID."""
        model = await self._get_model(repair_request_id)
        return self._model_to_entity(model) if model else None

    async def get_by_user_id(self, user_id: str) -> List[RepairRequest]:
        """Get all repair requests of a user, newest first."""
        stmt = (
            select(RepairRequestModel)
            .where(RepairRequestModel.user_id == user_id)
            .order_by(RepairRequestModel.created_at.desc())
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def update(self, repair_request: RepairRequest) -> RepairRequest:
        """Persist the current state of a repair request."""
        model = await self._get_model(repair_request.id)
        if not model:
            raise RepairRequestNotFoundError(repair_request.id)

        self._apply(model, repair_request)

        await self.db.flush()
        await self.db.refresh(model)

        return self._model_to_entity(model)

    async def _get_model(self, repair_request_id: UUID) -> Optional[RepairRequestModel]:
        stmt = select(RepairRequestModel).where(
            RepairRequestModel.id == repair_request_id
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _apply(model: RepairRequestModel, repair_request: RepairRequest) -> None:
        model.user_id = repair_request.user_id
        model.device_type = repair_request.device.device_type
        model.device_brand = repair_request.device.brand
        model.device_model = repair_request.device.model
        model.issue_description = repair_request.issue_description
        model.urgency_level = repair_request.urgency_level.value
        model.status = repair_request.status.value
        model.estimated_cost = repair_request.estimated_cost
        model.actual_cost = repair_request.actual_cost
        model.technician_id = repair_request.technician_id
        model.appointment_id = repair_request.appointment_id
        model.updated_at = repair_request.updated_at

    def _model_to_entity(self, model: RepairRequestModel) -> RepairRequest:
        """Convert SQLAlchemy model to domain entity."""
        return RepairRequest(
            id=model.id,
            user_id=model.user_id,
            device=DeviceInfo(
                device_type=model.device_type,
                brand=model.device_brand or "",
                model=model.device_model or "",
            ),
            issue_description=model.issue_description,
            urgency_level=model.urgency_level,
            status=model.status,
            estimated_cost=(
                float(model.estimated_cost) if model.estimated_cost is not None else None
            ),
            actual_cost=float(model.actual_cost) if model.actual_cost is not None else None,
            technician_id=model.technician_id,
            appointment_id=model.appointment_id,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
