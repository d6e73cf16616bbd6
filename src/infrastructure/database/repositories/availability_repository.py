"""
Availability calendar repository implementation.
"""

from datetime import date
from typing import List, Set
from uuid import UUID

from sqlalchemy import delete, exists, select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import AvailabilityRepositoryInterface
from src.config.logging import get_logger
from src.domain.value_objects.appointment_status import AppointmentStatus
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from src.infrastructure.database.models.appointment import AppointmentModel
from src.infrastructure.database.models.availability_slot import (
    AvailabilitySlotModel,
    CalendarDayModel,
)

logger = get_logger(__name__)

_INSERTS = {"postgresql": postgresql_insert, "sqlite": sqlite_insert}


class AvailabilityRepository(AvailabilityRepositoryInterface):
    """
    Calendar stored as one row per open slot.

    A day without a technician_calendar_days row has never been written and
    every slot in it is open. The first booking on such a day writes the
    marker plus the four slot rows, then books like any other day. Booking
    deletes a row and releasing inserts it back, so concurrent callers only
    ever race on a single row.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    def _slot_filter(
        self, technician_id: UUID, on_date: date, time_slot: AppointmentTimeSlot
    ):
        return (
            AvailabilitySlotModel.technician_id == technician_id,
            AvailabilitySlotModel.available_date == on_date,
            AvailabilitySlotModel.time_slot == time_slot.value,
        )

    def _day_exists(self, technician_id: UUID, on_date: date):
        return exists().where(
            CalendarDayModel.technician_id == technician_id,
            CalendarDayModel.calendar_date == on_date,
        )

    async def _insert_ignoring_duplicates(self, model, index_elements, **values) -> bool:
        """Insert a row unless its unique key exists; True when a row was written."""
        insert = _INSERTS.get(self.session.get_bind().dialect.name)
        if insert is not None:
            result = await self.session.execute(
                insert(model)
                .values(**values)
                .on_conflict_do_nothing(index_elements=index_elements)
            )
            return result.rowcount == 1

        filters = [getattr(model, key) == values[key] for key in index_elements]
        found = await self.session.execute(select(model.id).where(*filters))
        if found.scalar_one_or_none() is not None:
            return False
        self.session.add(model(**values))
        await self.session.flush()
        return True

    async def _mark_day(self, technician_id: UUID, on_date: date) -> bool:
        return await self._insert_ignoring_duplicates(
            CalendarDayModel,
            ["technician_id", "calendar_date"],
            technician_id=technician_id,
            calendar_date=on_date,
        )

    async def _insert_slot(
        self, technician_id: UUID, on_date: date, time_slot: AppointmentTimeSlot
    ) -> None:
        await self._insert_ignoring_duplicates(
            AvailabilitySlotModel,
            ["technician_id", "available_date", "time_slot"],
            technician_id=technician_id,
            available_date=on_date,
            time_slot=time_slot.value,
        )

    async def _active_slots(self, technician_id: UUID, on_date: date) -> Set[str]:
        result = await self.session.execute(
            select(AppointmentModel.time_slot).where(
                AppointmentModel.technician_id == technician_id,
                AppointmentModel.scheduled_date == on_date,
                AppointmentModel.status != AppointmentStatus.CANCELLED.value,
            )
        )
        return set(result.scalars().all())

    async def _materialize_day(self, technician_id: UUID, on_date: date) -> None:
        """Write a never-touched day out as four open slots."""
        if not await self._mark_day(technician_id, on_date):
            return

        booked = await self._active_slots(technician_id, on_date)
        for slot in AppointmentTimeSlot.ordered():
            if slot.value not in booked:
                await self._insert_slot(technician_id, on_date, slot)
        logger.debug(
            "Calendar day created",
            technician_id=str(technician_id),
            on_date=on_date.isoformat(),
        )

    async def check_time_slot_availability(
        self, technician_id: UUID, on_date: date, time_slot: AppointmentTimeSlot
    ) -> bool:
        """Check if a slot is open and not backing an active appointment."""
        is_open = exists().where(*self._slot_filter(technician_id, on_date, time_slot))
        is_booked = exists().where(
            AppointmentModel.technician_id == technician_id,
            AppointmentModel.scheduled_date == on_date,
            AppointmentModel.time_slot == time_slot.value,
            AppointmentModel.status != AppointmentStatus.CANCELLED.value,
        )
        day_written = self._day_exists(technician_id, on_date)
        result = await self.session.execute(
            select((is_open | ~day_written) & ~is_booked)
        )
        return bool(result.scalar())

    async def book_slot(
        self, technician_id: UUID, on_date: date, time_slot: AppointmentTimeSlot
    ) -> bool:
        """Consume an open slot; False means another caller got it first."""
        await self._materialize_day(technician_id, on_date)

        result = await self.session.execute(
            delete(AvailabilitySlotModel).where(
                *self._slot_filter(technician_id, on_date, time_slot)
            )
        )
        booked = result.rowcount == 1
        logger.debug(
            "Slot booking attempted",
            technician_id=str(technician_id),
            on_date=on_date.isoformat(),
            time_slot=time_slot.value,
            booked=booked,
        )
        return booked

    async def release_slot(
        self, technician_id: UUID, on_date: date, time_slot: AppointmentTimeSlot
    ) -> None:
        """Re-open a slot; a no-op when it is already open."""
        await self._mark_day(technician_id, on_date)
        await self._insert_slot(technician_id, on_date, time_slot)

    async def open_slots(
        self, technician_id: UUID, on_date: date
    ) -> List[AppointmentTimeSlot]:
        """Get open slots of a day in chronological order."""
        written = await self.session.execute(
            select(self._day_exists(technician_id, on_date))
        )
        if not written.scalar():
            booked = await self._active_slots(technician_id, on_date)
            return [
                slot for slot in AppointmentTimeSlot.ordered() if slot.value not in booked
            ]

        result = await self.session.execute(
            select(AvailabilitySlotModel.time_slot).where(
                AvailabilitySlotModel.technician_id == technician_id,
                AvailabilitySlotModel.available_date == on_date,
            )
        )
        values = set(result.scalars().all())
        return [slot for slot in AppointmentTimeSlot.ordered() if slot.value in values]

    async def close_day(self, technician_id: UUID, on_date: date) -> int:
        """Remove every open slot of a day; the day stays written, so it stays closed."""
        await self._mark_day(technician_id, on_date)
        result = await self.session.execute(
            delete(AvailabilitySlotModel).where(
                AvailabilitySlotModel.technician_id == technician_id,
                AvailabilitySlotModel.available_date == on_date,
            )
        )
        return result.rowcount

    async def has_open_slots(self, technician_id: UUID, from_date: date) -> bool:
        """Check if any written day on from_date or later still has an open slot."""
        result = await self.session.execute(
            select(
                exists().where(
                    AvailabilitySlotModel.technician_id == technician_id,
                    AvailabilitySlotModel.available_date >= from_date,
                )
            )
        )
        return bool(result.scalar())
