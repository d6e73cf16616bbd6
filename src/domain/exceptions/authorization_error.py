"""
Ownership-related domain exceptions.
"""

from .base import RepairDomainError


class UnauthorizedError(RepairDomainError):
    """Raised when the caller does not own the referenced resource."""

    error_type = "unauthorized"

    def __init__(self, resource: str, resource_id, caller_id: str):
        self.resource = resource
        self.resource_id = str(resource_id)
        self.caller_id = caller_id
        super().__init__(f"{resource} {resource_id} does not belong to caller")
