"""
Time source shared by use cases.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current aware UTC time."""
    return datetime.now(timezone.utc)
