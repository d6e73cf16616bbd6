"""
Appointment repository implementation.
"""

from datetime import date, datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import AppointmentRepositoryInterface
from src.config.logging import get_logger
from src.domain.entities.appointment import Appointment
from src.domain.exceptions.conflict_error import SlotTakenError
from src.domain.exceptions.not_found_error import AppointmentNotFoundError
from src.domain.exceptions.state_error import InvalidStateError
from src.domain.value_objects.address import Address
from src.domain.value_objects.appointment_status import AppointmentStatus
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from src.infrastructure.database.models.appointment import AppointmentModel
from src.infrastructure.database.models.base import as_utc

logger = get_logger(__name__)

_CANCELLABLE = [AppointmentStatus.SCHEDULED.value, AppointmentStatus.CONFIRMED.value]


class AppointmentRepository(AppointmentRepositoryInterface):
    """Appointment repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, appointment: Appointment) -> Appointment:
        """Create a new appointment; the partial unique index guards the slot."""
        model = AppointmentModel(id=appointment.id, created_at=appointment.created_at)
        self._apply(model, appointment)
        self.db.add(model)

        await self._flush_guarding_slot(appointment)
        await self.db.refresh(model)

        return self._model_to_entity(model)

    async def get_by_id(self, appointment_id: UUID) -> Optional[Appointment]:
        """Get appointment by ID."""
        model = await self._get_model(appointment_id)
        return self._model_to_entity(model) if model else None

    async def get_by_user_id(self, user_id: str) -> List[Appointment]:
        """Get every appointment booked by a user, latest visit first."""
        stmt = (
            select(AppointmentModel)
            .where(AppointmentModel.user_id == user_id)
            .order_by(
                AppointmentModel.scheduled_date.desc(),
                AppointmentModel.time_slot.desc(),
            )
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def find_active_for_slot(
        self, technician_id: UUID, scheduled_date: date, time_slot: AppointmentTimeSlot
    ) -> Optional[Appointment]:
        """Get the non-cancelled appointment holding a slot triple, if any."""
        stmt = select(AppointmentModel).where(
            AppointmentModel.technician_id == technician_id,
            AppointmentModel.scheduled_date == scheduled_date,
            AppointmentModel.time_slot == AppointmentTimeSlot(time_slot).value,
            AppointmentModel.status != AppointmentStatus.CANCELLED.value,
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def find_by_date(self, scheduled_date: date) -> List[Appointment]:
        """Get every non-cancelled appointment on a day."""
        stmt = (
            select(AppointmentModel)
            .where(
                AppointmentModel.scheduled_date == scheduled_date,
                AppointmentModel.status != AppointmentStatus.CANCELLED.value,
            )
            .order_by(AppointmentModel.time_slot, AppointmentModel.created_at)
        )
        result = await self.db.execute(stmt)
        return [self._model_to_entity(model) for model in result.scalars().all()]

    async def update(self, appointment: Appointment) -> Appointment:
        """Persist the current state of an appointment."""
        model = await self._get_model(appointment.id)
        if not model:
            raise AppointmentNotFoundError(appointment.id)

        self._apply(model, appointment)
        await self._flush_guarding_slot(appointment)
        await self.db.refresh(model)

        return self._model_to_entity(model)

    async def cancel(
        self, appointment_id: UUID, reason: Optional[str] = None
    ) -> Appointment:
        """Soft-cancel an appointment that is still scheduled or confirmed."""
        cancelled_at = datetime.now(timezone.utc)
        result = await self.db.execute(
            update(AppointmentModel)
            .where(
                AppointmentModel.id == appointment_id,
                AppointmentModel.status.in_(_CANCELLABLE),
            )
            .values(
                status=AppointmentStatus.CANCELLED.value,
                cancellation_reason=reason,
                cancelled_at=cancelled_at,
                updated_at=cancelled_at,
            )
            .execution_options(synchronize_session=False)
        )

        model = await self._get_model(appointment_id)
        if not model:
            raise AppointmentNotFoundError(appointment_id)
        if result.rowcount != 1:
            # Lost to a concurrent cancellation or completion.
            raise InvalidStateError(
                f"Cannot cancel appointment with status '{model.status}'"
            )

        return self._model_to_entity(model)

    async def _get_model(self, appointment_id: UUID) -> Optional[AppointmentModel]:
        stmt = (
            select(AppointmentModel)
            .where(AppointmentModel.id == appointment_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def _flush_guarding_slot(self, appointment: Appointment) -> None:
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning(
                "Appointment slot constraint violated",
                appointment_id=str(appointment.id),
                technician_id=str(appointment.technician_id),
                scheduled_date=appointment.scheduled_date.isoformat(),
                time_slot=appointment.time_slot.value,
                error=str(e.orig),
            )
            raise SlotTakenError(
                appointment.technician_id,
                appointment.scheduled_date,
                appointment.time_slot.value,
            ) from e

    @staticmethod
    def _apply(model: AppointmentModel, appointment: Appointment) -> None:
        model.repair_request_id = appointment.repair_request_id
        model.technician_id = appointment.technician_id
        model.user_id = appointment.user_id
        model.scheduled_date = appointment.scheduled_date
        model.time_slot = appointment.time_slot.value
        model.street = appointment.address.street
        model.city = appointment.address.city
        model.commune = appointment.address.commune
        model.region = appointment.address.region
        model.postal_code = appointment.address.postal_code
        model.notes = appointment.notes
        model.status = appointment.status.value
        model.cancellation_reason = appointment.cancellation_reason
        model.cancelled_at = appointment.cancelled_at
        model.updated_at = appointment.updated_at

    def _model_to_entity(self, model: AppointmentModel) -> Appointment:
        """Convert SQLAlchemy model to domain entity."""
        return Appointment(
            id=model.id,
            repair_request_id=model.repair_request_id,
            technician_id=model.technician_id,
            user_id=model.user_id,
            scheduled_date=model.scheduled_date,
            time_slot=model.time_slot,
            address=Address(
                street=model.street,
                city=model.city,
                commune=model.commune,
                region=model.region,
                postal_code=model.postal_code,
            ),
            notes=model.notes,
            status=model.status,
            cancellation_reason=model.cancellation_reason,
            cancelled_at=as_utc(model.cancelled_at),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )
