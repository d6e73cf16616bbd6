"""Repair estimate repository implementation."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import RepairEstimateRepositoryInterface
from src.domain.entities.repair_estimate import (
    PartAvailability,
    PartNeeded,
    RepairEstimate,
)
from src.infrastructure.database.models.base import as_utc
from src.infrastructure.database.models.repair_estimate import RepairEstimateModel


class RepairEstimateRepository(RepairEstimateRepositoryInterface):
    """Repair estimate repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, estimate: RepairEstimate) -> RepairEstimate:
        """Create a new estimate."""
        model = RepairEstimateModel(
            id=estimate.id,
            repair_request_id=estimate.repair_request_id,
            technician_id=estimate.technician_id,
            estimated_cost=estimate.estimated_cost,
            estimated_duration_hours=estimate.estimated_duration_hours,
            labor_cost=estimate.labor_cost,
            parts_needed=[part.to_dict() for part in estimate.parts_needed],
            notes=estimate.notes,
            valid_until=estimate.valid_until,
            created_at=estimate.created_at,
        )
        self.db.add(model)
        await self.db.flush()
        await self.db.refresh(model)

        return self._model_to_entity(model)

    async def get_by_id(self, estimate_id: UUID) -> Optional[RepairEstimate]:
        """Get estimate by ID."""
        result = await self.db.execute(
            select(RepairEstimateModel).where(RepairEstimateModel.id == estimate_id)
        )
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def get_by_repair_request_id(
        self, repair_request_id: UUID
    ) -> List[RepairEstimate]:
        """Get estimates of a repair request, newest first."""
        result = await self.db.execute(
            select(RepairEstimateModel)
            .where(RepairEstimateModel.repair_request_id == repair_request_id)
            .order_by(RepairEstimateModel.created_at.desc())
        )
        return [self._model_to_entity(model) for model in result.scalars().all()]

    def _model_to_entity(self, model: RepairEstimateModel) -> RepairEstimate:
        """Convert SQLAlchemy model to domain entity."""
        return RepairEstimate(
            id=model.id,
            repair_request_id=model.repair_request_id,
            technician_id=model.technician_id,
            estimated_cost=float(model.estimated_cost),
            estimated_duration_hours=model.estimated_duration_hours,
            labor_cost=float(model.labor_cost),
            parts_needed=[
                PartNeeded(
                    name=part["name"],
                    cost=part["cost"],
                    availability=PartAvailability(
                        part.get("availability", PartAvailability.IN_STOCK.value)
                    ),
                )
                for part in model.parts_needed or []
            ],
            notes=model.notes,
            valid_until=as_utc(model.valid_until),
            created_at=as_utc(model.created_at),
        )
