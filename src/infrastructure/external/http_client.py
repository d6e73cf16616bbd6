"""
Outbound HTTP calls to downstream services.
"""

import time
from typing import Any, Dict, Optional

import httpx
import structlog

from src.config.logging import get_logger
from src.config.settings import settings

logger = get_logger(__name__)


def _outbound_headers(extra: Optional[Dict[str, str]]) -> Dict[str, str]:
    headers = {"User-Agent": f"{settings.APP_NAME}/{settings.APP_VERSION}"}
    request_id = structlog.contextvars.get_contextvars().get("request_id")
    if request_id:
        headers["X-Request-ID"] = request_id
    headers.update(extra or {})
    return headers


class HTTPClient:
    """Short-lived async client; one per delivery."""

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout
        self.client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()

    async def post(
        self,
        url: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """POST a JSON body, tagging it with the current request id."""
        started = time.perf_counter()
        try:
            response = await self.client.post(
                url, json=data, headers=_outbound_headers(headers)
            )
        except httpx.HTTPError as e:
            logger.warning(
                "Outbound call failed",
                url=url,
                error=str(e),
                elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            raise

        logger.debug(
            "Outbound call completed",
            url=url,
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response
