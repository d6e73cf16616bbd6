"""
Configuration package.
"""

from .database import *
from .logging import *
from .settings import settings

__all__ = [
    "settings",

    # Database
    "get_database_url",
    "create_engine",
    "get_async_session_factory",
    "get_default_session_factory",
    "get_db_session",
    "close_database_connections",

    # Logging
    "configure_logging",
    "get_logger",
]
