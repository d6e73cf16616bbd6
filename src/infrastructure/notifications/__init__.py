"""
Notification adapters package.
"""

from .senders import (
    LoggingNotificationSender,
    WebhookNotificationSender,
    get_notification_sender,
)

__all__ = [
    "LoggingNotificationSender",
    "WebhookNotificationSender",
    "get_notification_sender",
]
