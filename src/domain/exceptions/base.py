"""
Base domain exception.
"""


class RepairDomainError(Exception):
    """Base exception for expected, caller-recoverable business failures."""

    error_type = "domain_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
