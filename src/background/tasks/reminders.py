"""
Celery tasks for appointment reminders.
"""

import asyncio
from datetime import date, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from src.application.services.clock import utc_now
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.application.use_cases.send_reminders import SendAppointmentRemindersUseCase
from src.background.celery_app import celery_app
from src.config.database import get_async_session_factory
from src.config.logging import get_logger
from src.config.settings import settings
from src.infrastructure.database.repositories.appointment_repository import (
    AppointmentRepository,
)
from src.infrastructure.notifications.senders import get_notification_sender

logger = get_logger(__name__)


def run_async_in_new_loop(coro):
    """
    Run an async coroutine in a new event loop.

    Each task gets its own loop so that engines and connections never
    cross loops between prefork children.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def tomorrow() -> date:
    """Tomorrow in the scheduling timezone."""
    today = utc_now().astimezone(ZoneInfo(settings.SCHEDULING_TIMEZONE)).date()
    return today + timedelta(days=1)


async def _send_reminders(for_date: date) -> dict:
    session_factory = get_async_session_factory()
    try:
        async with session_factory() as session:
            use_case = SendAppointmentRemindersUseCase(
                appointment_repo=AppointmentRepository(session),
                notifier=NotificationDispatcher(get_notification_sender()),
            )
            result = await use_case.execute(for_date)
    finally:
        await session_factory.kw["bind"].dispose()

    return {
        "for_date": result.for_date.isoformat(),
        "total": result.total,
        "sent": result.sent,
        "failed": result.failed,
    }


@celery_app.task(name="send_appointment_reminders_task")
def send_appointment_reminders_task(for_date: Optional[str] = None) -> dict:
    """Send reminders for every appointment on for_date (default: tomorrow)."""
    target = date.fromisoformat(for_date) if for_date else tomorrow()
    logger.info("Sending appointment reminders", for_date=target.isoformat())
    return run_async_in_new_loop(_send_reminders(target))
