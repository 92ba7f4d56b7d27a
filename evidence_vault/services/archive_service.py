"""
Archive orchestration: seal, fingerprint, store, record, and the reverse.
"""

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

import structlog
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from evidence_vault.crypto.envelope import seal, unseal
from evidence_vault.crypto.fingerprint import fingerprint_hex, verify_fingerprint
from evidence_vault.exceptions import RegistryError
from evidence_vault.models.storage import ArchiveReceipt
from evidence_vault.services.protocol import ProvenanceRegistry
from evidence_vault.services.transfer_service import TransferService

logger = structlog.get_logger(__name__)

SEALED_MARKER = "🔒"


def sealed_title(title: str) -> str:
    """Prefix a title with the sealed marker."""
    return f"{SEALED_MARKER} {title}"


def is_sealed_title(title: str) -> bool:
    """Check whether a recorded title marks a sealed archive."""
    return SEALED_MARKER in title


class ArchiveService:
    """
    Service for archiving payloads and reading them back.

    Sealing runs in a worker thread so large payloads do not block the loop.
    """

    def __init__(
        self,
        transfer: TransferService,
        registry: ProvenanceRegistry | None = None,
    ) -> None:
        """
        Args:
            transfer: Transfer service used to store and fetch blobs.
            registry: Optional provenance registry to record archives in.
        """
        self._transfer = transfer
        self._registry = registry

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
        Archive a payload, sealing it first when a recipient is given.

        Args:
            payload: Captured bytes (for example a zipped page snapshot).
            recipient_public_key: Seal to this key ("whistleblower mode").
            locator: Identifies what was archived; required for registry
                recording.
            title: Human-readable title. Sealed archives get the lock marker.
            metadata: Extra fields passed through to the registry.

        Returns:
            ArchiveReceipt with the handle and the fingerprint of the stored bytes.

        Raises:
            KeyFormatError: If the recipient key text cannot be parsed.
            AllEndpointsExhausted: If no publisher accepted the blob.
            RegistryError: If the blob was stored but recording it failed.
        """
        is_sealed = recipient_public_key is not None
        data = payload
        if recipient_public_key is not None:
            data = await asyncio.to_thread(seal, payload, recipient_public_key)
            logger.debug("Payload sealed", payload_size=len(payload), sealed_size=len(data))

        digest = fingerprint_hex(data)
        handle = await self._transfer.store_with_failover(data)
        created_at = datetime.now(timezone.utc)

        if is_sealed and title is not None:
            title = sealed_title(title)

        receipt = ArchiveReceipt(
            handle=handle,
            fingerprint_hex=digest,
            size=len(data),
            is_sealed=is_sealed,
            created_at=created_at,
            title=title,
        )

        if self._registry is not None and locator is not None:
            try:
                reference = await self._registry.record(
                    locator=locator,
                    handle=handle,
                    fingerprint_hex=digest,
                    timestamp=created_at,
                    metadata={**(metadata or {}), "title": title, "is_sealed": is_sealed},
                )
            except Exception as e:
                logger.error(
                    "Registry recording failed", handle=handle, fingerprint=digest, error=str(e)
                )
                msg = f"Stored but not recorded: {type(e).__name__}: {e}"
                raise RegistryError(msg, receipt=receipt) from e
            receipt = replace(receipt, registry_reference=reference)

        logger.info(
            "Archived",
            handle=handle,
            fingerprint=digest,
            size=len(data),
            sealed=is_sealed,
            registry_reference=receipt.registry_reference,
        )
        return receipt

    async def retrieve(
        self,
        handle: str,
        *,
        expected_fingerprint: bytes | str,
        private_key: RSAPrivateKey | str | bytes | None = None,
    ) -> bytes:
        """
        Fetch an archive, verify it, and unseal it when a key is given.

        Args:
            handle: Storage handle from the receipt or registry.
            expected_fingerprint: Fingerprint recorded at archive time.
            private_key: Recipient private key for sealed archives.

        Returns:
            The stored bytes, unsealed when ``private_key`` is given.

        Raises:
            AllEndpointsExhausted: If no aggregator served the blob.
            IntegrityError: If the bytes do not match the fingerprint.
            DecryptionFailed: If the blob is not sealed to ``private_key``.
        """
        data = await self._transfer.fetch_with_failover(handle)
        verify_fingerprint(data, expected_fingerprint)

        if private_key is None:
            return data
        return await asyncio.to_thread(unseal, data, private_key)
