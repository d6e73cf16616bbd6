"""
Validation-related domain exceptions.
"""

from datetime import datetime
from typing import Iterable

from .base import RepairDomainError


class ValidationError(RepairDomainError):
    """Base exception for malformed or out-of-range input."""

    error_type = "validation_error"


class RequiredFieldError(ValidationError):
    """Raised when required field is missing."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Required field '{field_name}' is missing")


class InvalidChoiceError(ValidationError):
    """Raised when a value is not one of the allowed choices."""

    def __init__(self, field_name: str, value, allowed: Iterable[str]):
        self.field_name = field_name
        self.value = value
        self.allowed = sorted(allowed)
        super().__init__(
            f"Invalid {field_name} '{value}', must be one of: {', '.join(self.allowed)}"
        )


class PastScheduleError(ValidationError):
    """Raised when a requested appointment starts in the past."""

    def __init__(self, starts_at: datetime):
        self.starts_at = starts_at
        super().__init__(
            f"Cannot schedule appointment in the past ({starts_at.isoformat()})"
        )
