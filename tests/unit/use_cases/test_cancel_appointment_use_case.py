"""
Unit tests for appointment cancellation and rescheduling.
"""

import dataclasses
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from src.application.services.cancellation_policy import CancellationPolicy
from src.application.use_cases.cancel_appointment import (
    CancelAppointmentRequest,
    CancelAppointmentUseCase,
)
from src.application.use_cases.reschedule_appointment import (
    RescheduleAppointmentRequest,
    RescheduleAppointmentUseCase,
)
from src.domain.entities.appointment import Appointment
from src.domain.exceptions import (
    AppointmentNotFoundError,
    CancellationWindowError,
    InvalidStateError,
    SlotTakenError,
    UnauthorizedError,
    ValidationError,
)
from src.domain.value_objects.appointment_status import AppointmentStatus
from src.domain.value_objects.notification_kind import NotificationKind
from src.domain.value_objects.repair_status import RepairStatus
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from tests.factories import TOMORROW, make_repair_request

# Tomorrow 10:00 UTC
STARTS_AT = datetime(2030, 6, 4, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def confirmed_pair(sample_address):
    repair_request = make_repair_request()
    appointment = Appointment(
        repair_request_id=repair_request.id,
        technician_id=uuid4(),
        user_id="user-1",
        scheduled_date=TOMORROW,
        time_slot=AppointmentTimeSlot.MORNING_10_12,
        address=sample_address,
    )
    repair_request.confirm(appointment.technician_id, appointment.id)
    return repair_request, appointment


def _cancelled_copy(appointment: Appointment, reason=None) -> Appointment:
    copy = dataclasses.replace(appointment)
    copy.cancel(reason)
    return copy


class TestCancelAppointmentUseCase:
    """Test cases for CancelAppointmentUseCase."""

    @pytest.fixture
    def build_use_case(
        self,
        mock_appointment_repository,
        mock_repair_request_repository,
        mock_availability_repository,
        mock_transaction_service,
        notifier,
        confirmed_pair,
    ):
        repair_request, appointment = confirmed_pair
        mock_appointment_repository.get_by_id.return_value = appointment
        mock_appointment_repository.cancel.side_effect = (
            lambda appointment_id, reason=None: _cancelled_copy(appointment, reason)
        )
        mock_repair_request_repository.get_by_id.return_value = repair_request

        def build(now: datetime) -> CancelAppointmentUseCase:
            return CancelAppointmentUseCase(
                appointment_repo=mock_appointment_repository,
                repair_request_repo=mock_repair_request_repository,
                availability_repo=mock_availability_repository,
                transaction_service=mock_transaction_service,
                notifier=notifier,
                policy=CancellationPolicy(cutoff_hours=2.0),
                clock=lambda: now,
            )

        return build

    @pytest.mark.asyncio
    async def test_cancel_three_hours_before(
        self,
        build_use_case,
        confirmed_pair,
        mock_availability_repository,
        recording_sender,
    ):
        repair_request, appointment = confirmed_pair

        cancelled = await build_use_case(STARTS_AT - timedelta(hours=3)).execute(
            CancelAppointmentRequest(appointment.id, "user-1", reason="Fixed it myself")
        )

        assert cancelled.status == AppointmentStatus.CANCELLED
        assert cancelled.cancellation_reason == "Fixed it myself"
        assert repair_request.status == RepairStatus.PENDING
        assert repair_request.appointment_id is None
        assert repair_request.technician_id is None
        mock_availability_repository.release_slot.assert_awaited_once_with(
            appointment.technician_id, TOMORROW, AppointmentTimeSlot.MORNING_10_12
        )
        assert recording_sender.sent == [(appointment.id, NotificationKind.CANCELLATION)]

    @pytest.mark.asyncio
    async def test_cancel_one_hour_before(
        self, build_use_case, confirmed_pair, mock_transaction_service
    ):
        _, appointment = confirmed_pair

        with pytest.raises(CancellationWindowError):
            await build_use_case(STARTS_AT - timedelta(hours=1)).execute(
                CancelAppointmentRequest(appointment.id, "user-1")
            )

        mock_transaction_service.execute_in_transaction.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_user(self, build_use_case, confirmed_pair):
        _, appointment = confirmed_pair

        with pytest.raises(UnauthorizedError):
            await build_use_case(STARTS_AT - timedelta(days=1)).execute(
                CancelAppointmentRequest(appointment.id, "intruder")
            )

    @pytest.mark.asyncio
    async def test_unknown_appointment(self, build_use_case, mock_appointment_repository):
        mock_appointment_repository.get_by_id.return_value = None

        with pytest.raises(AppointmentNotFoundError):
            await build_use_case(STARTS_AT - timedelta(days=1)).execute(
                CancelAppointmentRequest(uuid4(), "user-1")
            )

    @pytest.mark.asyncio
    async def test_stale_request_link_is_left_alone(
        self, build_use_case, confirmed_pair, mock_repair_request_repository
    ):
        repair_request, appointment = confirmed_pair
        repair_request.revert_to_pending()
        repair_request.confirm(uuid4(), uuid4())

        await build_use_case(STARTS_AT - timedelta(days=1)).execute(
            CancelAppointmentRequest(appointment.id, "user-1")
        )

        assert repair_request.status == RepairStatus.CONFIRMED
        mock_repair_request_repository.update.assert_not_awaited()


class TestRescheduleAppointmentUseCase:
    """Test cases for RescheduleAppointmentUseCase."""

    @pytest.fixture
    def build_use_case(
        self,
        mock_appointment_repository,
        mock_availability_repository,
        mock_transaction_service,
        notifier,
        confirmed_pair,
    ):
        _, appointment = confirmed_pair
        mock_appointment_repository.get_by_id.return_value = appointment

        def build(now: datetime) -> RescheduleAppointmentUseCase:
            return RescheduleAppointmentUseCase(
                appointment_repo=mock_appointment_repository,
                availability_repo=mock_availability_repository,
                transaction_service=mock_transaction_service,
                notifier=notifier,
                policy=CancellationPolicy(cutoff_hours=2.0),
                clock=lambda: now,
            )

        return build

    @pytest.mark.asyncio
    async def test_move_to_new_slot(
        self,
        build_use_case,
        confirmed_pair,
        mock_availability_repository,
        recording_sender,
    ):
        _, appointment = confirmed_pair
        technician_id = appointment.technician_id
        new_date = TOMORROW + timedelta(days=1)

        moved = await build_use_case(STARTS_AT - timedelta(days=1)).execute(
            RescheduleAppointmentRequest(
                appointment.id, "user-1", new_date, "16:00-18:00"
            )
        )

        assert moved.scheduled_date == new_date
        assert moved.time_slot == AppointmentTimeSlot.AFTERNOON_16_18
        mock_availability_repository.book_slot.assert_awaited_once_with(
            technician_id, new_date, AppointmentTimeSlot.AFTERNOON_16_18
        )
        mock_availability_repository.release_slot.assert_awaited_once_with(
            technician_id, TOMORROW, AppointmentTimeSlot.MORNING_10_12
        )
        assert recording_sender.sent == [(appointment.id, NotificationKind.CONFIRMATION)]

    @pytest.mark.asyncio
    async def test_inside_cutoff(self, build_use_case, confirmed_pair):
        _, appointment = confirmed_pair

        with pytest.raises(InvalidStateError):
            await build_use_case(STARTS_AT - timedelta(minutes=90)).execute(
                RescheduleAppointmentRequest(
                    appointment.id, "user-1", TOMORROW, "16:00-18:00"
                )
            )

    @pytest.mark.asyncio
    async def test_same_slot_rejected(self, build_use_case, confirmed_pair):
        _, appointment = confirmed_pair

        with pytest.raises(ValidationError):
            await build_use_case(STARTS_AT - timedelta(days=1)).execute(
                RescheduleAppointmentRequest(
                    appointment.id, "user-1", TOMORROW, "10:00-12:00"
                )
            )

    @pytest.mark.asyncio
    async def test_new_slot_taken_keeps_old_slot(
        self, build_use_case, confirmed_pair, mock_availability_repository
    ):
        _, appointment = confirmed_pair
        mock_availability_repository.book_slot.return_value = False

        with pytest.raises(SlotTakenError):
            await build_use_case(STARTS_AT - timedelta(days=1)).execute(
                RescheduleAppointmentRequest(
                    appointment.id, "user-1", TOMORROW, "14:00-16:00"
                )
            )

        assert appointment.time_slot == AppointmentTimeSlot.MORNING_10_12
        mock_availability_repository.release_slot.assert_not_awaited()
