"""
Application services package.
"""

from .cancellation_policy import CancellationPolicy
from .notification_dispatcher import NotificationDispatcher
from .repair_pricing import CostRange, RepairPricingTable
from .technician_matcher import TechnicianMatch, TechnicianMatcher

__all__ = [
    "CancellationPolicy",
    "CostRange",
    "NotificationDispatcher",
    "RepairPricingTable",
    "TechnicianMatch",
    "TechnicianMatcher",
]
