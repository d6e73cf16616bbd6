"""
Unit of work over one request's session.
"""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.services import TransactionServiceInterface
from src.config.logging import get_logger
from src.domain.exceptions.base import RepairDomainError

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionService(TransactionServiceInterface):
    """Commits a use case's writes together or not at all."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def execute_in_transaction(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run operation against the session and commit its writes.

        A booking that loses its slot raises a domain error from inside the
        operation; the rollback then also undoes the slot row it deleted.
        """
        try:
            result = await operation()
            await self.session.commit()
        except RepairDomainError as e:
            await self.session.rollback()
            logger.info(
                "Unit of work abandoned", error_type=e.error_type, error=e.message
            )
            raise
        except Exception:
            await self.session.rollback()
            logger.exception("Unit of work failed")
            raise

        return result
