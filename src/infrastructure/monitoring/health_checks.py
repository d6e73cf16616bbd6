"""
Health check implementations for the application.
"""

import time
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.logging import get_logger
from src.config.settings import settings

logger = get_logger(__name__)


class HealthChecker:
    """Health checker for application components."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def check_database(self) -> Dict[str, Any]:
        """Check database connectivity."""
        start_time = time.time()
        try:
            result = await self.db_session.execute(text("SELECT 1"))
            result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database health check failed", error=str(e))
            return {"status": "unhealthy", "error": str(e)}

        return {
            "status": "healthy",
            "response_time_ms": (time.time() - start_time) * 1000,
        }

    async def run_health_checks(self) -> Dict[str, Any]:
        """Run all health checks."""
        database = await self.check_database()
        return {
            "status": database["status"],
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "checks": {"database": database},
        }

    async def check_readiness(self) -> bool:
        """Check if the service can take traffic."""
        database = await self.check_database()
        return database["status"] == "healthy"
