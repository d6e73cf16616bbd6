"""
Unit tests for RepairPricingTable.
"""

import pytest

from src.application.services.repair_pricing import COST_MATRIX, CostRange, RepairPricingTable


class TestRepairPricingTable:
    """Test cases for RepairPricingTable."""

    @pytest.fixture
    def pricing(self):
        return RepairPricingTable()

    def test_known_device_and_issue(self, pricing):
        assert pricing.calculate_repair_cost("smartphone", "screen") == CostRange(15000, 50000)
        assert pricing.calculate_repair_cost("laptop", "motherboard") == CostRange(70000, 200000)

    def test_lookup_is_normalized(self, pricing):
        assert pricing.calculate_repair_cost(" Laptop ", "Power Supply") == pricing.calculate_repair_cost(
            "laptop", "default"
        )
        assert pricing.calculate_repair_cost("DESKTOP", "power supply") == CostRange(15000, 45000)

    def test_unknown_issue_falls_back_to_device_default(self, pricing):
        assert pricing.calculate_repair_cost("tablet", "speaker") == CostRange(20000, 75000)

    def test_unknown_device_falls_back_to_global_default(self, pricing):
        assert pricing.calculate_repair_cost("drone", "propeller") == CostRange(15000, 50000)

    def test_midpoint(self):
        assert CostRange(15000, 50000).midpoint == 32500

    def test_matrix_is_read_only(self):
        with pytest.raises(TypeError):
            COST_MATRIX["smartphone"]["screen"] = CostRange(1, 2)
