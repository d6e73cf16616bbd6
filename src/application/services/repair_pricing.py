"""
Static repair pricing table.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

DEFAULT_KEY = "default"


@dataclass(frozen=True)
class CostRange:
    """Price bracket for a repair."""

    min: int
    max: int

    @property
    def midpoint(self) -> float:
        """Single-figure estimate used when a request is created."""
        return (self.min + self.max) / 2

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"min": self.min, "max": self.max}


def _freeze(table: dict) -> Mapping[str, Mapping[str, CostRange]]:
    frozen = {}
    for device_type, issues in table.items():
        if isinstance(issues, CostRange):
            frozen[device_type] = issues
        else:
            frozen[device_type] = MappingProxyType(dict(issues))
    return MappingProxyType(frozen)


COST_MATRIX = _freeze(
    {
        "smartphone": {
            "screen": CostRange(15000, 50000),
            "battery": CostRange(10000, 25000),
            "charging": CostRange(8000, 20000),
            "water_damage": CostRange(25000, 75000),
            "camera": CostRange(15000, 45000),
            "software": CostRange(5000, 20000),
            DEFAULT_KEY: CostRange(15000, 50000),
        },
        "laptop": {
            "screen": CostRange(35000, 120000),
            "keyboard": CostRange(15000, 45000),
            "battery": CostRange(20000, 60000),
            "charging": CostRange(15000, 40000),
            "storage": CostRange(25000, 100000),
            "motherboard": CostRange(70000, 200000),
            DEFAULT_KEY: CostRange(25000, 100000),
        },
        "tablet": {
            "screen": CostRange(25000, 85000),
            "battery": CostRange(15000, 40000),
            "charging": CostRange(10000, 30000),
            DEFAULT_KEY: CostRange(20000, 75000),
        },
        "desktop": {
            "power_supply": CostRange(15000, 45000),
            "motherboard": CostRange(50000, 150000),
            "storage": CostRange(20000, 80000),
            "ram": CostRange(10000, 40000),
            "cpu": CostRange(40000, 180000),
            "gpu": CostRange(60000, 250000),
            DEFAULT_KEY: CostRange(30000, 120000),
        },
        "tv": {
            "screen": CostRange(50000, 250000),
            "power": CostRange(20000, 60000),
            "connectivity": CostRange(15000, 50000),
            DEFAULT_KEY: CostRange(35000, 200000),
        },
        DEFAULT_KEY: {DEFAULT_KEY: CostRange(15000, 50000)},
    }
)


class RepairPricingTable:
    """Lookup over the immutable device/issue cost matrix."""

    def __init__(self, matrix: Mapping[str, Mapping[str, CostRange]] = COST_MATRIX):
        self.matrix = matrix

    @staticmethod
    def normalize_device_type(device_type: str) -> str:
        return device_type.strip().lower()

    @staticmethod
    def normalize_issue_type(issue_type: str) -> str:
        return re.sub(r"\s+", "_", issue_type.strip().lower())

    def calculate_repair_cost(self, device_type: str, issue_type: str) -> CostRange:
        """Get the price bracket, falling back to 'default' at each level."""
        device_costs = self.matrix.get(
            self.normalize_device_type(device_type), self.matrix[DEFAULT_KEY]
        )
        return device_costs.get(
            self.normalize_issue_type(issue_type), device_costs[DEFAULT_KEY]
        )
