"""
Technician repository implementation.
"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence
from uuid import UUID
from zoneinfo import ZoneInfo

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import TechnicianRepositoryInterface
from src.application.services.clock import Clock, utc_now
from src.domain.entities.availability_record import AvailabilityRecord
from src.domain.entities.technician import Technician
from src.domain.value_objects.location import Location
from src.domain.value_objects.technician_specialty import TechnicianSpecialty
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from src.infrastructure.database.models.availability_slot import AvailabilitySlotModel
from src.infrastructure.database.models.base import as_utc
from src.infrastructure.database.models.technician import TechnicianModel


class TechnicianRepository(TechnicianRepositoryInterface):
    """Technician directory backed by the technicians and availability tables."""

    def __init__(
        self,
        session: AsyncSession,
        timezone_name: str = "UTC",
        lookahead_days: int = 60,
        clock: Clock = utc_now,
    ):
        self.session = session
        self.timezone_name = timezone_name
        self.lookahead_days = lookahead_days
        self.clock = clock

    def _today(self) -> date:
        return self.clock().astimezone(ZoneInfo(self.timezone_name)).date()

    async def get_by_id(self, technician_id: UUID) -> Optional[Technician]:
        """Get technician by ID, with upcoming availability loaded."""
        result = await self.session.execute(
            select(TechnicianModel).where(TechnicianModel.id == technician_id)
        )
        model = result.scalar_one_or_none()
        if not model:
            return None

        availability = await self._load_availability([model.id])
        return self._model_to_entity(model, availability.get(model.id, []))

    async def find_available(
        self,
        specialty: Optional[TechnicianSpecialty] = None,
        location: Optional[Location] = None,
    ) -> List[Technician]:
        """Technicians with an open upcoming slot, in directory order."""
        today = self._today()
        has_open_slot = exists().where(
            AvailabilitySlotModel.technician_id == TechnicianModel.id,
            AvailabilitySlotModel.available_date >= today,
        )
        stmt = select(TechnicianModel).where(has_open_slot)
        if location is not None:
            stmt = stmt.where(TechnicianModel.region == location.region)
            if location.city:
                stmt = stmt.where(TechnicianModel.city == location.city)
        stmt = stmt.order_by(TechnicianModel.created_at, TechnicianModel.id)

        result = await self.session.execute(stmt)
        models = result.scalars().all()

        # Specialties live in a JSON column, filtered here for portability.
        if specialty is not None:
            models = [model for model in models if specialty.value in model.specialties]

        availability = await self._load_availability([model.id for model in models])
        technicians = [
            self._model_to_entity(model, availability.get(model.id, []))
            for model in models
        ]
        return [technician for technician in technicians if technician.is_available]

    async def create(self, technician: Technician) -> Technician:
        """Register a technician in the directory."""
        model = TechnicianModel(
            id=technician.id,
            name=technician.name,
            email=technician.email,
            phone=technician.phone,
            specialties=[specialty.value for specialty in technician.specialties],
            rating=technician.rating,
            region=technician.location.region,
            city=technician.location.city,
            commune=technician.location.commune,
            created_at=technician.created_at,
            updated_at=technician.updated_at,
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return self._model_to_entity(model, technician.availability)

    async def _load_availability(
        self, technician_ids: Sequence[UUID]
    ) -> Dict[UUID, List[AvailabilityRecord]]:
        if not technician_ids:
            return {}

        today = self._today()
        stmt = select(
            AvailabilitySlotModel.technician_id,
            AvailabilitySlotModel.available_date,
            AvailabilitySlotModel.time_slot,
        ).where(
            AvailabilitySlotModel.technician_id.in_(technician_ids),
            AvailabilitySlotModel.available_date >= today,
            AvailabilitySlotModel.available_date
            <= today + timedelta(days=self.lookahead_days),
        )
        result = await self.session.execute(stmt)

        by_day: Dict[UUID, Dict[date, AvailabilityRecord]] = defaultdict(dict)
        for technician_id, available_date, time_slot in result.all():
            record = by_day[technician_id].setdefault(
                available_date, AvailabilityRecord(technician_id, available_date)
            )
            record.open_slots.add(AppointmentTimeSlot(time_slot))

        return {
            technician_id: [days[day] for day in sorted(days)]
            for technician_id, days in by_day.items()
        }

    def _model_to_entity(
        self, model: TechnicianModel, availability: List[AvailabilityRecord]
    ) -> Technician:
        """Convert SQLAlchemy model to domain entity."""
        return Technician(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            specialties=model.specialties or [],
            rating=model.rating,
            location=Location(region=model.region, city=model.city, commune=model.commune),
            availability=availability,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
