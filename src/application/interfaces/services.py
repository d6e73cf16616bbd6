"""
Service interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar
from uuid import UUID

from src.domain.value_objects.notification_kind import NotificationKind

T = TypeVar("T")


class NotificationSenderInterface(ABC):
    """Interface for customer notification delivery."""

    @abstractmethod
    async def send_appointment_notification(
        self, appointment_id: UUID, kind: NotificationKind
    ) -> None:
        """Deliver an appointment notification."""
        pass


class TransactionServiceInterface(ABC):
    """Interface for unit-of-work style transaction control."""

    @abstractmethod
    async def execute_in_transaction(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run operation, commit on success, roll back and re-raise on failure."""
        pass
