"""
Shared test data builders.
"""

from datetime import date, datetime, timezone
from typing import List, Tuple
from uuid import UUID, uuid4

from src.application.interfaces.services import NotificationSenderInterface
from src.domain.entities.availability_record import AvailabilityRecord
from src.domain.entities.repair_request import RepairRequest
from src.domain.entities.technician import Technician
from src.domain.value_objects.device import DeviceInfo
from src.domain.value_objects.location import Location
from src.domain.value_objects.notification_kind import NotificationKind
from src.domain.value_objects.time_slot import AppointmentTimeSlot

# Every scenario runs "now" at 2030-06-03 06:00 UTC (a Monday).
NOW = datetime(2030, 6, 3, 6, 0, tzinfo=timezone.utc)
TODAY = NOW.date()
TOMORROW = date(2030, 6, 4)


class RecordingSender(NotificationSenderInterface):
    """Notification sender that keeps what it was asked to send."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[Tuple[UUID, NotificationKind]] = []

    async def send_appointment_notification(
        self, appointment_id: UUID, kind: NotificationKind
    ) -> None:
        if self.fail:
            raise RuntimeError("messaging service down")
        self.sent.append((appointment_id, kind))


def make_technician(
    name: str = "Tech",
    specialties=("smartphone",),
    rating: float = 4.0,
    region: str = "Metropolitana",
    city: str = "Santiago",
    open_days=None,
) -> Technician:
    """Build a technician; open_days maps dates to iterables of open slots."""
    technician_id = uuid4()
    open_days = {TOMORROW: list(AppointmentTimeSlot)} if open_days is None else open_days
    return Technician(
        id=technician_id,
        name=name,
        email=f"{name.lower().replace(' ', '.')}@example.com",
        phone="+56 9 5555 0000",
        specialties=list(specialties),
        rating=rating,
        location=Location(region=region, city=city),
        availability=[
            AvailabilityRecord(technician_id, day, set(slots))
            for day, slots in open_days.items()
        ],
    )


def make_repair_request(**overrides) -> RepairRequest:
    """Build a pending repair request for user-1."""
    fields = {
        "user_id": "user-1",
        "device": DeviceInfo("smartphone", "Samsung", "Galaxy S21"),
        "issue_description": "Cracked screen",
        "urgency_level": "high",
    }
    fields.update(overrides)
    return RepairRequest(**fields)
