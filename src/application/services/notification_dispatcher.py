"""
Fire-and-forget wrapper around the notification sender.
"""

from uuid import UUID

from src.application.interfaces.services import NotificationSenderInterface
from src.config.logging import get_logger
from src.domain.value_objects.notification_kind import NotificationKind

logger = get_logger(__name__)


class NotificationDispatcher:
    """Sends appointment notifications without letting failures escape."""

    def __init__(self, sender: NotificationSenderInterface):
        self.sender = sender

    async def notify(self, appointment_id: UUID, kind: NotificationKind) -> bool:
        """
        Send a notification.

        Returns:
            True if the sender accepted it, False if delivery failed
        """
        try:
            await self.sender.send_appointment_notification(appointment_id, kind)
            return True
        except Exception as e:
            # Delivery is best effort; the booking or cancellation already committed.
            logger.warning(
                "Appointment notification failed",
                appointment_id=str(appointment_id),
                kind=kind.value,
                error=str(e),
            )
            return False
