"""
Appointment notification senders.
"""

from datetime import datetime, timezone
from typing import Dict, Optional
from uuid import UUID

from src.application.interfaces.services import NotificationSenderInterface
from src.config.logging import get_logger
from src.config.settings import settings
from src.domain.value_objects.notification_kind import NotificationKind
from src.infrastructure.external.http_client import HTTPClient
from src.infrastructure.monitoring.metrics import record_notification

logger = get_logger(__name__)


class LoggingNotificationSender(NotificationSenderInterface):
    """Writes notifications to the log; used when no webhook is configured."""

    async def send_appointment_notification(
        self, appointment_id: UUID, kind: NotificationKind
    ) -> None:
        logger.info(
            "Appointment notification",
            appointment_id=str(appointment_id),
            kind=kind.value,
        )
        record_notification(kind.value, "logged")


class WebhookNotificationSender(NotificationSenderInterface):
    """Posts notifications to a downstream messaging service."""

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 5.0,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.headers = headers or {}

    async def send_appointment_notification(
        self, appointment_id: UUID, kind: NotificationKind
    ) -> None:
        payload = {
            "appointment_id": str(appointment_id),
            "kind": kind.value,
            "sent_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            async with HTTPClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url, data=payload, headers=self.headers
                )
                response.raise_for_status()
        except Exception:
            record_notification(kind.value, "failed")
            raise

        record_notification(kind.value, "sent")
        logger.info(
            "Appointment notification delivered",
            appointment_id=str(appointment_id),
            kind=kind.value,
            status_code=response.status_code,
        )


def get_notification_sender() -> NotificationSenderInterface:
    """Build the sender configured in settings."""
    if settings.NOTIFICATION_WEBHOOK_URL:
        return WebhookNotificationSender(
            settings.NOTIFICATION_WEBHOOK_URL,
            timeout=settings.NOTIFICATION_TIMEOUT_SECONDS,
        )
    return LoggingNotificationSender()
