"""Repair request read use cases."""

from typing import List
from uuid import UUID

from src.application.interfaces.repositories import RepairRequestRepositoryInterface
from src.config.logging import get_logger
from src.domain.entities.repair_request import RepairRequest
from src.domain.exceptions.authorization_error import UnauthorizedError
from src.domain.exceptions.not_found_error import RepairRequestNotFoundError

logger = get_logger(__name__)


async def load_owned_repair_request(
    repair_request_repo: RepairRequestRepositoryInterface,
    repair_request_id: UUID,
    user_id: str,
) -> RepairRequest:
    """Fetch a repair request and make sure the caller created it."""
    repair_request = await repair_request_repo.get_by_id(repair_request_id)
    if not repair_request:
        raise RepairRequestNotFoundError(repair_request_id)
    if not repair_request.is_owned_by(user_id):
        raise UnauthorizedError("Repair request", repair_request_id, user_id)
    return repair_request


class GetRepairRequestUseCase:
    """Fetch one of the caller's repair requests."""

    def __init__(self, repair_request_repo: RepairRequestRepositoryInterface):
        self.repair_request_repo = repair_request_repo

    async def execute(self, repair_request_id: UUID, user_id: str) -> RepairRequest:
        return await load_owned_repair_request(
            self.repair_request_repo, repair_request_id, user_id
        )


class ListUserRepairRequestsUseCase:
    """List every repair request the caller created."""

    def __init__(self, repair_request_repo: RepairRequestRepositoryInterface):
        self.repair_request_repo = repair_request_repo

    async def execute(self, user_id: str) -> List[RepairRequest]:
        repair_requests = await self.repair_request_repo.get_by_user_id(user_id)
        logger.debug(
            "Listed repair requests", user_id=user_id, count=len(repair_requests)
        )
        return repair_requests
