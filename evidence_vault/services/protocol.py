"""
Provenance registry protocol definition.

The registry (an on-chain archive registry in the reference deployment) is
not implemented here; any object with this shape can be plugged into
ArchiveService.
"""

from datetime import datetime
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ProvenanceRegistry(Protocol):
    """Records an immutable proof that a blob was stored."""

    async def record(
        self,
        *,
        locator: str,
        handle: str,
        fingerprint_hex: str,
        timestamp: datetime,
        metadata: dict[str, Any],
    ) -> str:
        """
        Record a stored archive.

        Args:
            locator: What was archived (for example the captured page URL).
            handle: Storage handle of the blob.
            fingerprint_hex: SHA-256 of the stored bytes, lowercase hex.
            timestamp: When the archive was made (UTC).
            metadata: Opaque extra fields, such as the title.

        Returns:
            Immutable confirmation reference (for example a transaction digest).
        """
        ...
