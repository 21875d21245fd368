"""
Pooled httpx client shared by the Gemini calls.

One ``httpx.AsyncClient`` serves both model calls of a submission. Each call
passes its own timeout (extraction and support differ), so the client only
carries a connect timeout and a generous read ceiling.

Lifecycle (main.py):
    await http_client_manager.startup()    # lifespan start
    await http_client_manager.shutdown()   # lifespan end
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger("MoodJournal.HTTP")


class HTTPClientManager:
    """Owns the process-wide AsyncClient and its connection limits."""

    def __init__(
        self,
        max_connections: int = 50,
        max_keepalive_connections: int = 10,
        connect_timeout: float = 5.0,
        read_timeout: float = 60.0,
    ):
        self._max_connections = max_connections
        self._max_keepalive_connections = max_keepalive_connections
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_connections=self._max_connections,
            max_keepalive_connections=self._max_keepalive_connections,
        )

    @property
    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self._read_timeout, connect=self._connect_timeout)

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    async def startup(self) -> None:
        """Open the shared client. Calling it twice is a no-op."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(limits=self.limits, timeout=self.timeout)
        logger.info(
            "HTTP client ready (max_connections=%s, keepalive=%s)",
            self._max_connections,
            self._max_keepalive_connections,
        )

    async def shutdown(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None
        logger.info("HTTP client closed")

    async def get_client(self) -> httpx.AsyncClient:
        """Return the shared client, opening it if the lifespan has not run."""
        if self._client is None:
            logger.warning("HTTP client used before startup; opening it lazily")
            await self.startup()
        return self._client


http_client_manager = HTTPClientManager()
