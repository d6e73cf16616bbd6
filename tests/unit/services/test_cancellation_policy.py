"""
Unit tests for CancellationPolicy.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from src.application.services.cancellation_policy import CancellationPolicy
from src.domain.entities.appointment import Appointment
from src.domain.exceptions import (
    CancellationWindowError,
    InvalidStateError,
    UnauthorizedError,
)
from src.domain.value_objects.time_slot import AppointmentTimeSlot
from tests.factories import TOMORROW


class TestCancellationPolicy:
    """Test cases for CancellationPolicy."""

    @pytest.fixture
    def policy(self):
        return CancellationPolicy(cutoff_hours=2.0)

    @pytest.fixture
    def appointment(self, sample_address):
        # Starts tomorrow at 14:00 UTC
        return Appointment(
            repair_request_id=uuid4(),
            technician_id=uuid4(),
            user_id="user-1",
            scheduled_date=TOMORROW,
            time_slot=AppointmentTimeSlot.AFTERNOON_14_16,
            address=sample_address,
        )

    @pytest.fixture
    def starts_at(self):
        return datetime(2030, 6, 4, 14, 0, tzinfo=timezone.utc)

    def test_three_hours_before_is_allowed(self, policy, appointment, starts_at):
        policy.ensure_can_cancel(appointment, "user-1", starts_at - timedelta(hours=3))

    def test_exactly_at_cutoff_is_allowed(self, policy, appointment, starts_at):
        policy.ensure_can_cancel(appointment, "user-1", starts_at - timedelta(hours=2))

    def test_one_hour_before_is_rejected(self, policy, appointment, starts_at):
        with pytest.raises(CancellationWindowError) as exc_info:
            policy.ensure_can_cancel(
                appointment, "user-1", starts_at - timedelta(hours=1)
            )

        assert isinstance(exc_info.value, InvalidStateError)
        assert exc_info.value.starts_at == starts_at

    def test_after_start_is_rejected(self, policy, appointment, starts_at):
        with pytest.raises(CancellationWindowError):
            policy.ensure_can_cancel(
                appointment, "user-1", starts_at + timedelta(minutes=5)
            )

    def test_other_user_is_rejected_first(self, policy, appointment, starts_at):
        # Ownership is checked before the window.
        with pytest.raises(UnauthorizedError):
            policy.ensure_can_cancel(
                appointment, "intruder", starts_at - timedelta(minutes=30)
            )

    def test_already_cancelled_is_rejected(self, policy, appointment, starts_at):
        appointment.cancel()
        with pytest.raises(InvalidStateError):
            policy.ensure_can_cancel(
                appointment, "user-1", starts_at - timedelta(days=1)
            )

    def test_cutoff_uses_scheduling_timezone(self, appointment):
        # 14:00 in Santiago (UTC-4 in June) is 18:00 UTC.
        policy = CancellationPolicy(cutoff_hours=2.0, timezone_name="America/Santiago")
        now = datetime(2030, 6, 4, 15, 30, tzinfo=timezone.utc)

        assert policy.is_outside_cutoff(appointment, now) is True
        assert CancellationPolicy(cutoff_hours=2.0).is_outside_cutoff(
            appointment, now
        ) is False
