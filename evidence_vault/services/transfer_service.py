"""
Resilient blob transfer across publisher and aggregator pools.

Each operation walks its pool in order, trying every endpoint exactly once
and returning on the first success. There is no retry or backoff against a
single endpoint: a failure moves straight on to the next one.
"""

import random
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import structlog

from evidence_vault.api.endpoints.blobs import read_blob, store_blob
from evidence_vault.api.http_client import AsyncHttpClient
from evidence_vault.config import EvidenceVaultConfig
from evidence_vault.exceptions import AllEndpointsExhausted, EndpointAttemptFailed
from evidence_vault.models.storage import StoredBlob

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class TransferService:
    """
    Service for storing and fetching opaque blobs with failover.

    Stateless between calls apart from the static endpoint pools.
    """

    def __init__(
        self,
        http: AsyncHttpClient,
        config: EvidenceVaultConfig,
        *,
        rng: random.Random | None = None,
    ) -> None:
        """
        Args:
            http: Async HTTP client, already opened by the caller.
            config: Client configuration holding the endpoint pools.
            rng: Random source for pool shuffling, used only when
                ``config.shuffle_endpoints`` is set.
        """
        self._http = http
        self._config = config
        self._rng = rng or random.Random()

    async def store_with_failover(self, blob: bytes) -> str:
        """
        Store a blob on the first publisher that accepts it.

        Args:
            blob: Bytes to store (sealed or plaintext).

        Returns:
            The blob handle reported by the accepting publisher.

        Raises:
            AllEndpointsExhausted: If every publisher failed.
        """
        stored = await self.store(blob)
        return stored.blob_id

    async def store(self, blob: bytes) -> StoredBlob:
        """
        Store a blob and return the full normalized publisher response.

        Raises:
            AllEndpointsExhausted: If every publisher failed.
        """

        async def attempt(publisher: str) -> StoredBlob:
            return await store_blob(
                self._http, publisher, blob, epochs=self._config.storage_epochs
            )

        stored = await self._with_failover("store", self._config.publishers, attempt)
        logger.info(
            "Blob stored",
            blob_id=stored.blob_id,
            status=str(stored.status),
            endpoint=stored.endpoint,
            size=len(blob),
        )
        return stored

    async def fetch_with_failover(self, handle: str) -> bytes:
        """
        Fetch a blob from the first aggregator that serves it.

        Args:
            handle: Blob handle returned by ``store_with_failover``.

        Returns:
            The stored bytes, unverified. Check them against the recorded
            fingerprint before trusting them.

        Raises:
            ValueError: If the handle is empty.
            AllEndpointsExhausted: If every aggregator failed.
        """
        if not handle:
            msg = "handle must not be empty"
            raise ValueError(msg)

        async def attempt(aggregator: str) -> bytes:
            return await read_blob(self._http, aggregator, handle)

        data = await self._with_failover("fetch", self._config.aggregators, attempt)
        logger.debug("Blob fetched", blob_id=handle, size=len(data))
        return data

    async def _with_failover(
        self,
        operation: str,
        pool: Sequence[str],
        attempt: Callable[[str], Awaitable[T]],
    ) -> T:
        endpoints = self._ordered(pool)
        last_error: EndpointAttemptFailed | None = None

        for index, endpoint in enumerate(endpoints, start=1):
            logger.debug("Attempting endpoint", operation=operation, endpoint=endpoint, attempt=index)
            try:
                return await attempt(endpoint)
            except EndpointAttemptFailed as e:
                last_error = e
                logger.warning(
                    "Endpoint failed, trying next",
                    operation=operation,
                    endpoint=endpoint,
                    status_code=e.status_code,
                    error=e.message,
                )

        logger.error("All endpoints failed", operation=operation, attempts=len(endpoints))
        last_message = last_error.message if last_error is not None else "empty pool"
        msg = f"All endpoints failed for {operation}. Last error: {last_message}"
        raise AllEndpointsExhausted(
            msg, operation=operation, attempts=len(endpoints), last_error=last_error
        ) from last_error

    def _ordered(self, pool: Sequence[str]) -> list[str]:
        endpoints = list(pool)
        if self._config.shuffle_endpoints:
            self._rng.shuffle(endpoints)
        return endpoints
