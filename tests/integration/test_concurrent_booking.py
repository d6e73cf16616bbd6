"""
Two customers booking the same slot at the same time, each on its own connection.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.use_cases.schedule_appointment import (
    ScheduleAppointmentRequest,
    ScheduleAppointmentUseCase,
)
from src.domain.entities.appointment import Appointment
from src.domain.exceptions import SlotTakenError
from src.domain.value_objects.address import Address
from src.domain.value_objects.appointment_status import AppointmentStatus
from src.domain.value_objects.repair_status import RepairStatus
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from src.infrastructure.database.models import AppointmentModel, Base
from src.infrastructure.database.repositories import (
    AppointmentRepository,
    AvailabilityRepository,
    RepairRequestRepository,
    TechnicianRepository,
    TransactionService,
)
from tests.factories import TOMORROW, RecordingSender, make_repair_request, make_technician

NOW = datetime(2030, 6, 3, 10, 0, tzinfo=timezone.utc)


class Rendezvous:
    """Holds every caller until all of them have arrived."""

    def __init__(self, parties: int):
        self.parties = parties
        self.arrived = 0
        self.everyone_here = asyncio.Event()

    async def wait(self):
        self.arrived += 1
        if self.arrived >= self.parties:
            self.everyone_here.set()
        await self.everyone_here.wait()


class CheckThenWaitAvailability(AvailabilityRepository):
    """Lets both bookers pass the open-slot check before either books."""

    def __init__(self, session, rendezvous: Rendezvous):
        super().__init__(session)
        self.rendezvous = rendezvous

    async def check_time_slot_availability(self, technician_id, on_date, time_slot):
        is_open = await super().check_time_slot_availability(
            technician_id, on_date, time_slot
        )
        await self.rendezvous.wait()
        return is_open


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """File database so each session gets its own connection."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'booking.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


async def _add_technician(session_factory, open_tomorrow: bool):
    technician = make_technician(open_days={})
    async with session_factory() as session:
        await TechnicianRepository(session, clock=lambda: NOW).create(technician)
        availability = AvailabilityRepository(session)
        if open_tomorrow:
            for slot in AppointmentTimeSlot:
                await availability.release_slot(technician.id, TOMORROW, slot)
        else:
            # Keeps the technician available while tomorrow stays unwritten.
            await availability.release_slot(
                technician.id, TOMORROW + timedelta(days=1), AppointmentTimeSlot.MORNING_8_10
            )
        await session.commit()
    return technician


async def _add_repair_request(session_factory, user_id):
    async with session_factory() as session:
        repair_request = await RepairRequestRepository(session).create(
            make_repair_request(user_id=user_id)
        )
        await session.commit()
    return repair_request


async def _book(session_factory, rendezvous, repair_request, technician):
    async with session_factory() as session:
        use_case = ScheduleAppointmentUseCase(
            repair_request_repo=RepairRequestRepository(session),
            technician_repo=TechnicianRepository(session, clock=lambda: NOW),
            appointment_repo=AppointmentRepository(session),
            availability_repo=CheckThenWaitAvailability(session, rendezvous),
            transaction_service=TransactionService(session),
            notifier=NotificationDispatcher(RecordingSender()),
            clock=lambda: NOW,
        )
        return await use_case.execute(
            ScheduleAppointmentRequest(
                repair_request_id=repair_request.id,
                user_id=repair_request.user_id,
                technician_id=technician.id,
                scheduled_date=TOMORROW,
                time_slot="10:00-12:00",
                address=Address(
                    street="Av. Providencia 1234",
                    city="Santiago",
                    commune="Providencia",
                    region="Metropolitana",
                ),
            )
        )


class TestConcurrentBooking:
    """Only one of two simultaneous bookings of a slot may win."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("open_tomorrow", [True, False], ids=["written-day", "unwritten-day"])
    async def test_one_winner_one_conflict(self, file_session_factory, open_tomorrow):
        technician = await _add_technician(file_session_factory, open_tomorrow)
        first = await _add_repair_request(file_session_factory, "u1")
        second = await _add_repair_request(file_session_factory, "u2")
        rendezvous = Rendezvous(parties=2)

        outcomes = await asyncio.gather(
            _book(file_session_factory, rendezvous, first, technician),
            _book(file_session_factory, rendezvous, second, technician),
            return_exceptions=True,
        )

        booked = [outcome for outcome in outcomes if isinstance(outcome, Appointment)]
        refused = [outcome for outcome in outcomes if isinstance(outcome, SlotTakenError)]
        assert len(booked) == 1
        assert len(refused) == 1

        async with file_session_factory() as session:
            active = await session.execute(
                select(func.count()).select_from(AppointmentModel).where(
                    AppointmentModel.technician_id == technician.id,
                    AppointmentModel.status != AppointmentStatus.CANCELLED.value,
                )
            )
            assert active.scalar() == 1

            requests = RepairRequestRepository(session)
            statuses = sorted(
                [
                    (await requests.get_by_id(first.id)).status.value,
                    (await requests.get_by_id(second.id)).status.value,
                ]
            )
            assert statuses == sorted(
                [RepairStatus.CONFIRMED.value, RepairStatus.PENDING.value]
            )

            open_slots = await AvailabilityRepository(session).open_slots(
                technician.id, TOMORROW
            )
            assert AppointmentTimeSlot.MORNING_10_12 not in open_slots
            assert len(open_slots) == 3
