"""
Integration tests for booking and cancelling against a real database.
"""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from src.application.services.cancellation_policy import CancellationPolicy
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.services.technician_matcher import TechnicianMatcher
from src.application.use_cases.cancel_appointment import (
    CancelAppointmentRequest,
    CancelAppointmentUseCase,
)
from src.application.use_cases.cancel_repair_request import (
    CancelRepairRequestRequest,
    CancelRepairRequestUseCase,
)
from src.application.use_cases.reschedule_appointment import (
    RescheduleAppointmentRequest,
    RescheduleAppointmentUseCase,
)
from src.application.use_cases.schedule_appointment import (
    ScheduleAppointmentRequest,
    ScheduleAppointmentUseCase,
)
from src.domain.entities.appointment import Appointment
from src.domain.exceptions import (
    InvalidStateError,
    SlotTakenError,
    UnauthorizedError,
)
from src.domain.value_objects.address import Address
from src.domain.value_objects.appointment_status import AppointmentStatus
from src.domain.value_objects.location import Location
from src.domain.value_objects.repair_status import RepairStatus
from src.domain.value_objects.technician_specialty import TechnicianSpecialty
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from src.infrastructure.database.models import AppointmentModel
from src.infrastructure.database.repositories import (
    AppointmentRepository,
    AvailabilityRepository,
    RepairRequestRepository,
    TechnicianRepository,
    TransactionService,
)
from tests.factories import TOMORROW, RecordingSender, make_repair_request, make_technician

# Tomorrow's 10:00-12:00 slot starts here.
SLOT_START = datetime(2030, 6, 4, 10, 0, tzinfo=timezone.utc)
DAY_AFTER = TOMORROW + timedelta(days=1)


class Harness:
    """Real repositories sharing one session, with a movable clock."""

    def __init__(self, session, now):
        self.session = session
        self.now = now
        self.sender = RecordingSender()
        self.repair_requests = RepairRequestRepository(session)
        self.technicians = TechnicianRepository(session, clock=self.clock)
        self.appointments = AppointmentRepository(session)
        self.availability = AvailabilityRepository(session)
        self.transactions = TransactionService(session)
        self.notifier = NotificationDispatcher(self.sender)
        self.policy = CancellationPolicy(cutoff_hours=2.0)

    def clock(self):
        return self.now

    async def add_technician(self, open_slots=None, on_date=TOMORROW, **kwargs):
        technician = make_technician(open_days={}, **kwargs)
        await self.technicians.create(technician)
        for slot in open_slots if open_slots is not None else list(AppointmentTimeSlot):
            await self.availability.release_slot(technician.id, on_date, slot)
        await self.session.commit()
        return technician

    async def add_repair_request(self, user_id="u1"):
        repair_request = await self.repair_requests.create(
            make_repair_request(user_id=user_id)
        )
        await self.session.commit()
        return repair_request

    def scheduler(self):
        return ScheduleAppointmentUseCase(
            repair_request_repo=self.repair_requests,
            technician_repo=self.technicians,
            appointment_repo=self.appointments,
            availability_repo=self.availability,
            transaction_service=self.transactions,
            notifier=self.notifier,
            clock=self.clock,
        )

    def canceller(self):
        return CancelAppointmentUseCase(
            appointment_repo=self.appointments,
            repair_request_repo=self.repair_requests,
            availability_repo=self.availability,
            transaction_service=self.transactions,
            notifier=self.notifier,
            policy=self.policy,
            clock=self.clock,
        )

    async def schedule(self, repair_request, technician, slot="10:00-12:00", user_id="u1"):
        return await self.scheduler().execute(
            ScheduleAppointmentRequest(
                repair_request_id=repair_request.id,
                user_id=user_id,
                technician_id=technician.id,
                scheduled_date=TOMORROW,
                time_slot=slot,
                address=_address(),
            )
        )

    async def active_appointments_for(self, technician, slot):
        result = await self.session.execute(
            select(func.count()).select_from(AppointmentModel).where(
                AppointmentModel.technician_id == technician.id,
                AppointmentModel.scheduled_date == TOMORROW,
                AppointmentModel.time_slot == slot,
                AppointmentModel.status != AppointmentStatus.CANCELLED.value,
            )
        )
        return result.scalar()


def _address():
    return Address(
        street="Av. Providencia 1234",
        city="Santiago",
        commune="Providencia",
        region="Metropolitana",
    )


@pytest_asyncio.fixture
async def harness(db_session):
    return Harness(db_session, SLOT_START - timedelta(days=1))


class TestSchedulingFlow:
    """Booking, conflicts and cancellation end to end."""

    @pytest.mark.asyncio
    async def test_booking_confirms_request_and_consumes_slot(self, harness):
        technician = await harness.add_technician(specialties=["smartphone"])
        repair_request = await harness.add_repair_request()

        appointment = await harness.schedule(repair_request, technician)

        stored_request = await harness.repair_requests.get_by_id(repair_request.id)
        assert stored_request.status == RepairStatus.CONFIRMED
        assert stored_request.appointment_id == appointment.id
        assert stored_request.technician_id == technician.id

        open_slots = await harness.availability.open_slots(technician.id, TOMORROW)
        assert AppointmentTimeSlot.MORNING_10_12 not in open_slots
        assert len(open_slots) == 3

    @pytest.mark.asyncio
    async def test_second_booking_of_same_slot_conflicts(self, harness):
        technician = await harness.add_technician()
        first = await harness.add_repair_request()
        second = await harness.add_repair_request(user_id="u2")
        await harness.schedule(first, technician)

        with pytest.raises(SlotTakenError):
            await harness.schedule(second, technician, user_id="u2")

        stored = await harness.repair_requests.get_by_id(second.id)
        assert stored.status == RepairStatus.PENDING
        assert await harness.active_appointments_for(technician, "10:00-12:00") == 1

    @pytest.mark.asyncio
    async def test_cancel_three_hours_before_reopens_slot(self, harness):
        technician = await harness.add_technician()
        repair_request = await harness.add_repair_request()
        appointment = await harness.schedule(repair_request, technician)

        harness.now = SLOT_START - timedelta(hours=3)
        cancelled = await harness.canceller().execute(
            CancelAppointmentRequest(appointment.id, "u1", reason="No longer needed")
        )

        assert cancelled.status == AppointmentStatus.CANCELLED
        stored_request = await harness.repair_requests.get_by_id(repair_request.id)
        assert stored_request.status == RepairStatus.PENDING
        assert stored_request.appointment_id is None
        assert stored_request.technician_id is None
        assert await harness.availability.check_time_slot_availability(
            technician.id, TOMORROW, AppointmentTimeSlot.MORNING_10_12
        )

    @pytest.mark.asyncio
    async def test_cancel_one_hour_before_is_refused(self, harness):
        technician = await harness.add_technician()
        repair_request = await harness.add_repair_request()
        appointment = await harness.schedule(repair_request, technician)

        harness.now = SLOT_START - timedelta(hours=1)
        with pytest.raises(InvalidStateError):
            await harness.canceller().execute(CancelAppointmentRequest(appointment.id, "u1"))

        stored = await harness.appointments.get_by_id(appointment.id)
        assert stored.status == AppointmentStatus.SCHEDULED
        assert not await harness.availability.check_time_slot_availability(
            technician.id, TOMORROW, AppointmentTimeSlot.MORNING_10_12
        )

    @pytest.mark.asyncio
    async def test_slot_can_be_rebooked_after_cancellation(self, harness):
        technician = await harness.add_technician()
        first = await harness.add_repair_request()
        appointment = await harness.schedule(first, technician)
        await harness.canceller().execute(CancelAppointmentRequest(appointment.id, "u1"))

        second = await harness.add_repair_request(user_id="u2")
        rebooked = await harness.schedule(second, technician, user_id="u2")

        assert rebooked.status == AppointmentStatus.SCHEDULED
        assert await harness.active_appointments_for(technician, "10:00-12:00") == 1

    @pytest.mark.asyncio
    async def test_foreign_user_cannot_schedule_or_cancel(self, harness):
        technician = await harness.add_technician()
        repair_request = await harness.add_repair_request()

        with pytest.raises(UnauthorizedError):
            await harness.schedule(repair_request, technician, user_id="u2")

        appointment = await harness.schedule(repair_request, technician)
        with pytest.raises(UnauthorizedError):
            await harness.canceller().execute(CancelAppointmentRequest(appointment.id, "u2"))

    @pytest.mark.asyncio
    async def test_database_guards_duplicate_active_appointment(self, harness):
        technician = await harness.add_technician()
        first = await harness.add_repair_request()
        second = await harness.add_repair_request(user_id="u2")
        await harness.schedule(first, technician)

        duplicate = Appointment(
            repair_request_id=second.id,
            technician_id=technician.id,
            user_id="u2",
            scheduled_date=TOMORROW,
            time_slot=AppointmentTimeSlot.MORNING_10_12,
            address=_address(),
        )
        with pytest.raises(SlotTakenError):
            await harness.transactions.execute_in_transaction(
                lambda: harness.appointments.create(duplicate)
            )

        assert await harness.active_appointments_for(technician, "10:00-12:00") == 1

    @pytest.mark.asyncio
    async def test_reschedule_swaps_slots(self, harness):
        technician = await harness.add_technician()
        repair_request = await harness.add_repair_request()
        appointment = await harness.schedule(repair_request, technician)

        moved = await RescheduleAppointmentUseCase(
            appointment_repo=harness.appointments,
            availability_repo=harness.availability,
            transaction_service=harness.transactions,
            notifier=harness.notifier,
            policy=harness.policy,
            clock=harness.clock,
        ).execute(
            RescheduleAppointmentRequest(appointment.id, "u1", TOMORROW, "16:00-18:00")
        )

        assert moved.time_slot == AppointmentTimeSlot.AFTERNOON_16_18
        open_slots = await harness.availability.open_slots(technician.id, TOMORROW)
        assert AppointmentTimeSlot.MORNING_10_12 in open_slots
        assert AppointmentTimeSlot.AFTERNOON_16_18 not in open_slots

    @pytest.mark.asyncio
    async def test_cancelling_confirmed_request_frees_its_slot(self, harness):
        technician = await harness.add_technician()
        repair_request = await harness.add_repair_request()
        appointment = await harness.schedule(repair_request, technician)

        cancelled = await CancelRepairRequestUseCase(
            repair_request_repo=harness.repair_requests,
            appointment_repo=harness.appointments,
            availability_repo=harness.availability,
            transaction_service=harness.transactions,
            notifier=harness.notifier,
            policy=harness.policy,
            clock=harness.clock,
        ).execute(CancelRepairRequestRequest(repair_request.id, "u1"))

        assert cancelled.status == RepairStatus.CANCELLED
        stored = await harness.appointments.get_by_id(appointment.id)
        assert stored.status == AppointmentStatus.CANCELLED
        assert await harness.availability.check_time_slot_availability(
            technician.id, TOMORROW, AppointmentTimeSlot.MORNING_10_12
        )


class TestUnwrittenCalendarDay:
    """Days the technician's calendar has never recorded are fully open."""

    @pytest.mark.asyncio
    async def test_unwritten_day_lists_every_slot(self, harness):
        technician = await harness.add_technician(
            open_slots=[AppointmentTimeSlot.MORNING_8_10], on_date=DAY_AFTER
        )

        assert await harness.availability.open_slots(technician.id, TOMORROW) == (
            AppointmentTimeSlot.ordered()
        )
        assert await harness.availability.check_time_slot_availability(
            technician.id, TOMORROW, AppointmentTimeSlot.MORNING_10_12
        )

    @pytest.mark.asyncio
    async def test_first_booking_creates_the_day(self, harness):
        technician = await harness.add_technician(
            open_slots=[AppointmentTimeSlot.MORNING_8_10], on_date=DAY_AFTER
        )
        repair_request = await harness.add_repair_request()

        appointment = await harness.schedule(repair_request, technician)

        stored = await harness.repair_requests.get_by_id(repair_request.id)
        assert stored.status == RepairStatus.CONFIRMED
        assert stored.appointment_id == appointment.id
        assert await harness.availability.open_slots(technician.id, TOMORROW) == [
            AppointmentTimeSlot.MORNING_8_10,
            AppointmentTimeSlot.AFTERNOON_14_16,
            AppointmentTimeSlot.AFTERNOON_16_18,
        ]

    @pytest.mark.asyncio
    async def test_slot_taken_on_created_day_conflicts(self, harness):
        technician = await harness.add_technician(
            open_slots=[AppointmentTimeSlot.MORNING_8_10], on_date=DAY_AFTER
        )
        first = await harness.add_repair_request()
        second = await harness.add_repair_request(user_id="u2")
        await harness.schedule(first, technician)

        with pytest.raises(SlotTakenError):
            await harness.schedule(second, technician, user_id="u2")

        assert await harness.active_appointments_for(technician, "10:00-12:00") == 1

    @pytest.mark.asyncio
    async def test_closed_day_is_not_reopened(self, harness):
        technician = await harness.add_technician(
            open_slots=[AppointmentTimeSlot.MORNING_8_10], on_date=DAY_AFTER
        )
        await harness.availability.close_day(technician.id, TOMORROW)
        await harness.session.commit()
        repair_request = await harness.add_repair_request()

        assert await harness.availability.open_slots(technician.id, TOMORROW) == []
        with pytest.raises(SlotTakenError):
            await harness.schedule(repair_request, technician)


class TestTechnicianDirectory:
    """Directory queries feeding the matcher."""

    @pytest.mark.asyncio
    async def test_fully_booked_technician_is_not_available(self, harness):
        busy = await harness.add_technician(name="Busy", open_slots=[AppointmentTimeSlot.MORNING_10_12])
        free = await harness.add_technician(name="Free")
        repair_request = await harness.add_repair_request()
        await harness.schedule(repair_request, busy)

        available = await harness.technicians.find_available()

        assert [technician.id for technician in available] == [free.id]
        assert (await harness.technicians.get_by_id(busy.id)).is_available is False

    @pytest.mark.asyncio
    async def test_matcher_over_directory(self, harness):
        await harness.add_technician(name="T1", specialties=["smartphone"], rating=4)
        t2 = await harness.add_technician(name="T2", specialties=["smartphone", "laptop"], rating=5)

        best = await TechnicianMatcher(harness.technicians).find_best_technician(
            TechnicianSpecialty.SMARTPHONE, Location(region="Metropolitana")
        )

        assert best.id == t2.id

    @pytest.mark.asyncio
    async def test_find_available_filters_by_location(self, harness):
        await harness.add_technician(name="Coast", region="Valparaíso", city="Viña del Mar")
        local = await harness.add_technician(name="Local")

        found = await harness.technicians.find_available(
            specialty=TechnicianSpecialty.SMARTPHONE,
            location=Location(region="Metropolitana", city="Santiago"),
        )

        assert [technician.id for technician in found] == [local.id]
