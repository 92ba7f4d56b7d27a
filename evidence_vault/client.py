"""
Evidence vault client facade.

This is the main entry point for orchestration code. It wires the HTTP
client, transfer layer and archive service together behind one API.
"""

import asyncio
from typing import Any, Self

import httpx
import structlog
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from evidence_vault.api.http_client import AsyncHttpClient
from evidence_vault.config import EvidenceVaultConfig
from evidence_vault.crypto.key_store import KeyStore
from evidence_vault.models.crypto import KeyPair
from evidence_vault.models.storage import ArchiveReceipt
from evidence_vault.services.archive_service import ArchiveService
from evidence_vault.services.protocol import ProvenanceRegistry
from evidence_vault.services.transfer_service import TransferService

logger = structlog.get_logger(__name__)


class EvidenceVaultClient:
    """
    Async client for sealed, fingerprinted, failover-backed archives.

    Example:
        ```python
        async with EvidenceVaultClient() as client:
            receipt = await client.archive(
                zip_bytes,
                recipient_public_key=journalist_key_text,
                locator="https://example.com/article",
                title="Article snapshot",
            )

            # Later, on the recipient's machine
            keypair = client.key_store.load_or_create()
            data = await client.retrieve(
                receipt.handle,
                expected_fingerprint=receipt.fingerprint_hex,
                private_key=keypair.private_key,
            )
        ```

    Args:
        config: Client configuration. Uses defaults if not provided.
        registry: Optional provenance registry for recording archives.
        transport: Optional httpx transport for testing (mock transport).
    """

    def __init__(
        self,
        config: EvidenceVaultConfig | None = None,
        *,
        registry: ProvenanceRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or EvidenceVaultConfig()
        self._registry = registry
        self._transport = transport
        self._key_store = KeyStore(self._config.key_store_dir)

        self._http: AsyncHttpClient | None = None
        self._transfer_service: TransferService | None = None
        self._archive_service: ArchiveService | None = None

        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def __aenter__(self) -> Self:
        """Enter async context."""
        await self._ensure_initialized()
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        """Exit async context."""
        await self.close()

    async def _ensure_initialized(self) -> None:
        async with self._init_lock:
            if self._initialized:
                return

            self._http = AsyncHttpClient(self._config, transport=self._transport)
            self._http.open()

            self._transfer_service = TransferService(self._http, self._config)
            self._archive_service = ArchiveService(self._transfer_service, self._registry)

            self._initialized = True
            logger.debug("Client initialized")

    async def close(self) -> None:
        """Close the client and release resources."""
        async with self._init_lock:
            if self._http:
                await self._http.aclose()
                self._http = None

            self._transfer_service = None
            self._archive_service = None
            self._initialized = False
            logger.debug("Client closed")

    @property
    def config(self) -> EvidenceVaultConfig:
        return self._config

    @property
    def key_store(self) -> KeyStore:
        """Local store of this identity's recipient keypair."""
        return self._key_store

    def load_or_create_keypair(self) -> KeyPair:
        """Load the local recipient keypair, generating it on first use."""
        return self._key_store.load_or_create()

    async def store_with_failover(self, blob: bytes) -> str:
        """
        Store opaque bytes on the first publisher that accepts them.

        Raises:
            AllEndpointsExhausted: If every publisher failed.
        """
        await self._ensure_initialized()
        if self._transfer_service is None:
            raise RuntimeError("Client not initialized")
        return await self._transfer_service.store_with_failover(blob)

    async def fetch_with_failover(self, handle: str) -> bytes:
        """
        Fetch opaque bytes from the first aggregator that serves them.

        Raises:
            AllEndpointsExhausted: If every aggregator failed.
        """
        await self._ensure_initialized()
        if self._transfer_service is None:
            raise RuntimeError("Client not initialized")
        return await self._transfer_service.fetch_with_failover(handle)

    async def archive(
        self,
        payload: bytes,
        *,
        recipient_public_key: RSAPublicKey | str | bytes | None = None,
        locator: str | None = None,
        title: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ArchiveReceipt:
        """
        Seal (optionally), fingerprint, store and record a payload.

        See ``ArchiveService.archive``.
        """
        await self._ensure_initialized()
        if self._archive_service is None:
            raise RuntimeError("Client not initialized")
        return await self._archive_service.archive(
            payload,
            recipient_public_key=recipient_public_key,
            locator=locator,
            title=title,
            metadata=metadata,
        )

    async def retrieve(
        self,
        handle: str,
        *,
        expected_fingerprint: bytes | str,
        private_key: RSAPrivateKey | str | bytes | None = None,
    ) -> bytes:
        """
        Fetch, verify and (optionally) unseal an archive.

        See ``ArchiveService.retrieve``.
        """
        await self._ensure_initialized()
        if self._archive_service is None:
            raise RuntimeError("Client not initialized")
        return await self._archive_service.retrieve(
            handle,
            expected_fingerprint=expected_fingerprint,
            private_key=private_key,
        )
