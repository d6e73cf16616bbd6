"""
API routes package.
"""

from .appointments import router as appointments_router
from .estimates import router as estimates_router
from .health import router as health_router
from .repairs import router as repairs_router
from .technicians import router as technicians_router

__all__ = [
    "appointments_router",
    "estimates_router",
    "health_router",
    "repairs_router",
    "technicians_router",
]
