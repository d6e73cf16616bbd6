"""
Unit tests for the repair request lifecycle use cases.
"""

from uuid import uuid4

import pytest

from src.application.services.cancellation_policy import CancellationPolicy
from src.application.use_cases.cancel_repair_request import (
    CancelRepairRequestRequest,
    CancelRepairRequestUseCase,
)
from src.application.use_cases.create_repair_request import (
    CreateRepairRequestRequest,
    CreateRepairRequestUseCase,
)
from src.application.use_cases.update_repair_request import (
    UpdateRepairRequestRequest,
    UpdateRepairRequestUseCase,
)
from src.application.use_cases.update_repair_status import (
    CompleteRepairRequest,
    CompleteRepairUseCase,
    StartRepairUseCase,
)
from src.domain.entities.appointment import Appointment
from src.domain.exceptions import (
    InvalidChoiceError,
    InvalidStateError,
    InvalidStatusTransitionError,
    RequiredFieldError,
    UnauthorizedError,
    ValidationError,
)
from src.domain.value_objects.appointment_status import AppointmentStatus
from src.domain.value_objects.repair_status import RepairStatus
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from src.domain.value_objects.urgency_level import UrgencyLevel
from tests.factories import TOMORROW, make_repair_request


class TestCreateRepairRequestUseCase:
    """Test cases for CreateRepairRequestUseCase."""

    @pytest.fixture
    def use_case(self, mock_repair_request_repository, mock_transaction_service):
        return CreateRepairRequestUseCase(
            mock_repair_request_repository, mock_transaction_service
        )

    @pytest.mark.asyncio
    async def test_creates_pending_request(self, use_case, mock_repair_request_repository):
        created = await use_case.execute(
            CreateRepairRequestRequest(
                user_id="user-1",
                device_type=" smartphone ",
                device_brand="Apple",
                device_model="iPhone 13",
                issue_description="Battery drains fast",
                urgency_level="medium",
            )
        )

        assert created.status == RepairStatus.PENDING
        assert created.urgency_level == UrgencyLevel.MEDIUM
        assert created.device.device_type == "smartphone"
        assert created.estimated_cost is None
        mock_repair_request_repository.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_missing_description(self, use_case):
        with pytest.raises(RequiredFieldError):
            await use_case.execute(
                CreateRepairRequestRequest("user-1", "laptop", "", "", "  ", "low")
            )

    @pytest.mark.asyncio
    async def test_unknown_urgency(self, use_case):
        with pytest.raises(InvalidChoiceError):
            await use_case.execute(
                CreateRepairRequestRequest("user-1", "laptop", "", "", "Broken", "asap")
            )


class TestUpdateRepairRequestUseCase:
    """Test cases for UpdateRepairRequestUseCase."""

    @pytest.mark.asyncio
    async def test_partial_update(
        self, mock_repair_request_repository, mock_transaction_service
    ):
        repair_request = make_repair_request()
        mock_repair_request_repository.get_by_id.return_value = repair_request

        updated = await UpdateRepairRequestUseCase(
            mock_repair_request_repository, mock_transaction_service
        ).execute(
            UpdateRepairRequestRequest(
                repair_request_id=repair_request.id,
                user_id="user-1",
                urgency_level="low",
            )
        )

        assert updated.urgency_level == UrgencyLevel.LOW
        assert updated.issue_description == "Cracked screen"

    @pytest.mark.asyncio
    async def test_other_users_request(
        self, mock_repair_request_repository, mock_transaction_service
    ):
        repair_request = make_repair_request()
        mock_repair_request_repository.get_by_id.return_value = repair_request

        with pytest.raises(UnauthorizedError):
            await UpdateRepairRequestUseCase(
                mock_repair_request_repository, mock_transaction_service
            ).execute(
                UpdateRepairRequestRequest(
                    repair_request_id=repair_request.id,
                    user_id="intruder",
                    issue_description="Hijacked",
                )
            )


class TestCancelRepairRequestUseCase:
    """Test cases for CancelRepairRequestUseCase."""

    @pytest.fixture
    def use_case(
        self,
        mock_repair_request_repository,
        mock_appointment_repository,
        mock_availability_repository,
        mock_transaction_service,
        notifier,
        clock,
    ):
        return CancelRepairRequestUseCase(
            repair_request_repo=mock_repair_request_repository,
            appointment_repo=mock_appointment_repository,
            availability_repo=mock_availability_repository,
            transaction_service=mock_transaction_service,
            notifier=notifier,
            policy=CancellationPolicy(cutoff_hours=2.0),
            clock=clock,
        )

    @pytest.mark.asyncio
    async def test_cancel_pending_request(
        self, use_case, mock_repair_request_repository, mock_appointment_repository
    ):
        repair_request = make_repair_request()
        mock_repair_request_repository.get_by_id.return_value = repair_request

        cancelled = await use_case.execute(
            CancelRepairRequestRequest(repair_request.id, "user-1")
        )

        assert cancelled.status == RepairStatus.CANCELLED
        mock_appointment_repository.cancel.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancel_confirmed_request_releases_slot(
        self,
        use_case,
        sample_address,
        mock_repair_request_repository,
        mock_appointment_repository,
        mock_availability_repository,
    ):
        repair_request = make_repair_request()
        appointment = Appointment(
            repair_request_id=repair_request.id,
            technician_id=uuid4(),
            user_id="user-1",
            scheduled_date=TOMORROW,
            time_slot=AppointmentTimeSlot.AFTERNOON_14_16,
            address=sample_address,
        )
        repair_request.confirm(appointment.technician_id, appointment.id)
        mock_repair_request_repository.get_by_id.return_value = repair_request
        mock_appointment_repository.get_by_id.return_value = appointment

        cancelled = await use_case.execute(
            CancelRepairRequestRequest(repair_request.id, "user-1", reason="Moved away")
        )

        assert cancelled.status == RepairStatus.CANCELLED
        assert cancelled.appointment_id is None
        mock_appointment_repository.cancel.assert_awaited_once_with(
            appointment.id, "Moved away"
        )
        mock_availability_repository.release_slot.assert_awaited_once_with(
            appointment.technician_id, TOMORROW, AppointmentTimeSlot.AFTERNOON_14_16
        )

    @pytest.mark.asyncio
    async def test_completed_request_cannot_be_cancelled(
        self, use_case, mock_repair_request_repository
    ):
        repair_request = make_repair_request(status=RepairStatus.COMPLETED)
        mock_repair_request_repository.get_by_id.return_value = repair_request

        with pytest.raises(InvalidStatusTransitionError):
            await use_case.execute(CancelRepairRequestRequest(repair_request.id, "user-1"))


class TestRepairStatusUseCases:
    """Test cases for StartRepairUseCase and CompleteRepairUseCase."""

    @pytest.fixture
    def assigned_request(self, mock_repair_request_repository):
        repair_request = make_repair_request()
        repair_request.confirm(uuid4(), uuid4())
        mock_repair_request_repository.get_by_id.return_value = repair_request
        return repair_request

    @pytest.mark.asyncio
    async def test_start_and_complete(
        self,
        assigned_request,
        sample_address,
        mock_repair_request_repository,
        mock_appointment_repository,
        mock_transaction_service,
    ):
        technician_id = assigned_request.technician_id
        appointment = Appointment(
            id=assigned_request.appointment_id,
            repair_request_id=assigned_request.id,
            technician_id=technician_id,
            user_id="user-1",
            scheduled_date=TOMORROW,
            time_slot=AppointmentTimeSlot.MORNING_8_10,
            address=sample_address,
        )
        mock_appointment_repository.get_by_id.return_value = appointment

        started = await StartRepairUseCase(
            mock_repair_request_repository, mock_transaction_service
        ).execute(assigned_request.id, technician_id)
        assert started.status == RepairStatus.IN_PROGRESS

        completed = await CompleteRepairUseCase(
            mock_repair_request_repository,
            mock_appointment_repository,
            mock_transaction_service,
        ).execute(CompleteRepairRequest(assigned_request.id, technician_id, 38000))

        assert completed.status == RepairStatus.COMPLETED
        assert completed.actual_cost == 38000
        assert appointment.status == AppointmentStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_only_assigned_technician(
        self, assigned_request, mock_repair_request_repository, mock_transaction_service
    ):
        with pytest.raises(UnauthorizedError):
            await StartRepairUseCase(
                mock_repair_request_repository, mock_transaction_service
            ).execute(assigned_request.id, uuid4())

    @pytest.mark.asyncio
    async def test_cannot_complete_before_start(
        self,
        assigned_request,
        mock_repair_request_repository,
        mock_appointment_repository,
        mock_transaction_service,
    ):
        with pytest.raises(InvalidStateError):
            await CompleteRepairUseCase(
                mock_repair_request_repository,
                mock_appointment_repository,
                mock_transaction_service,
            ).execute(
                CompleteRepairRequest(assigned_request.id, assigned_request.technician_id)
            )

    @pytest.mark.asyncio
    async def test_negative_cost_rejected(
        self,
        assigned_request,
        mock_repair_request_repository,
        mock_appointment_repository,
        mock_transaction_service,
    ):
        with pytest.raises(ValidationError):
            await CompleteRepairUseCase(
                mock_repair_request_repository,
                mock_appointment_repository,
                mock_transaction_service,
            ).execute(
                CompleteRepairRequest(
                    assigned_request.id, assigned_request.technician_id, -1
                )
            )
