"""
Technician specialty value object.
"""

from enum import Enum


class TechnicianSpecialty(str, Enum):
    """Category of device repair expertise."""

    SMARTPHONE = "smartphone"
    LAPTOP = "laptop"
    TABLET = "tablet"
    DESKTOP = "desktop"
    GAMING = "gaming"
    AUDIO = "audio"
    TV = "tv"
    APPLIANCE = "appliance"

    @classmethod
    def values(cls) -> list[str]:
        """Get all specialty values."""
        return [specialty.value for specialty in cls]
