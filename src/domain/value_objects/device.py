"""
Device descriptor value object.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DeviceInfo:
    """The device a repair request is about."""

    device_type: str
    brand: str
    model: str

    def __post_init__(self):
        """Validate device fields."""
        if not self.device_type or not self.device_type.strip():
            raise ValueError("Device type is required")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "device_type": self.device_type,
            "brand": self.brand,
            "model": self.model,
        }
