"""
Async HTTP client for storage endpoints.

One httpx.AsyncClient is shared by every endpoint in both pools, so requests
are addressed by absolute URL rather than relative to a base URL.
"""

import asyncio
from typing import Any, Self

import httpx
import structlog

from evidence_vault.config import EvidenceVaultConfig

logger = structlog.get_logger(__name__)


class AsyncHttpClient:
    """
    Thin wrapper adding a hard per-request deadline to httpx.

    Args:
        config: Client configuration (timeout, User-Agent).
        transport: Optional transport for testing (mock transport).
    """

    def __init__(
        self,
        config: EvidenceVaultConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> Self:
        self.open()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def open(self) -> None:
        """Create the underlying httpx client. No-op if already open."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            timeout=self._config.timeout,
            transport=self._transport,
            headers={"User-Agent": self._config.user_agent},
        )
        logger.debug("HTTP client opened", timeout=self._config.timeout)

    async def aclose(self) -> None:
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        content: bytes | None = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """
        Send one request under a hard deadline.

        httpx timeouts bound each connect/read phase separately; the deadline
        here bounds the whole exchange, so a trickling body cannot stall an
        attempt past ``config.timeout``.

        Args:
            method: HTTP method (GET, PUT, etc.).
            url: Absolute URL.
            content: Raw request body.
            params: Query parameters.
            timeout: Deadline in seconds. Defaults to ``config.timeout``.

        Returns:
            The response with its body loaded. Status is not checked.

        Raises:
            httpx.HTTPError: If the request fails at the transport level.
            TimeoutError: If the deadline passes.
        """
        if self._client is None:
            msg = "HTTP client not initialized. Use 'async with' first."
            raise RuntimeError(msg)

        deadline = timeout if timeout is not None else self._config.timeout
        async with asyncio.timeout(deadline):
            return await self._client.request(method, url, content=content, params=params)
