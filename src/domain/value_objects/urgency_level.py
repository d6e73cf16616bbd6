"""
Urgency level value object.
"""

from enum import Enum


class UrgencyLevel(str, Enum):
    """Customer-declared urgency of a repair."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
