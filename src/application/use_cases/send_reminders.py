"""Appointment reminder use case."""

from dataclasses import dataclass
from datetime import date

from src.application.interfaces.repositories import AppointmentRepositoryInterface
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.config.logging import get_logger
from src.domain.value_objects.appointment_status import AppointmentStatus
from src.domain.value_objects.notification_kind import NotificationKind

logger = get_logger(__name__)


@dataclass
class ReminderResult:
    """Outcome of a reminder run."""

    for_date: date
    total: int
    sent: int
    failed: int


class SendAppointmentRemindersUseCase:
    """Send a reminder for every upcoming visit on a given day."""

    def __init__(
        self,
        appointment_repo: AppointmentRepositoryInterface,
        notifier: NotificationDispatcher,
    ):
        self.appointment_repo = appointment_repo
        self.notifier = notifier

    async def execute(self, for_date: date) -> ReminderResult:
        appointments = [
            appointment
            for appointment in await self.appointment_repo.find_by_date(for_date)
            if appointment.status != AppointmentStatus.COMPLETED
        ]

        sent = 0
        for appointment in appointments:
            if await self.notifier.notify(appointment.id, NotificationKind.REMINDER):
                sent += 1

        result = ReminderResult(
            for_date=for_date,
            total=len(appointments),
            sent=sent,
            failed=len(appointments) - sent,
        )
        logger.info(
            "Appointment reminders sent",
            for_date=for_date.isoformat(),
            total=result.total,
            sent=result.sent,
            failed=result.failed,
        )
        return result
