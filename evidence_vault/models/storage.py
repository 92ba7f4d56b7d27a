"""
Storage and archive domain models.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class BlobStatus(StrEnum):
    """How a publisher accepted a blob."""

    NEWLY_CREATED = "newlyCreated"
    ALREADY_CERTIFIED = "alreadyCertified"


@dataclass(frozen=True, kw_only=True)
class StoredBlob:
    """
    Normalized publisher response.

    Attributes:
        blob_id: Content handle used to read the blob back.
        status: Whether the blob was freshly stored or already known.
        endpoint: Base URL of the publisher that accepted the blob.
        object_id: On-chain object ID, when the publisher reports one.
    """

    blob_id: str
    status: BlobStatus
    endpoint: str
    object_id: str | None = None


@dataclass(frozen=True, kw_only=True)
class ArchiveReceipt:
    """
    Result of archiving a payload.

    The fingerprint covers the stored bytes, so for sealed archives it is
    the digest of the sealed blob, not of the plaintext.
    """

    handle: str
    fingerprint_hex: str
    size: int
    is_sealed: bool
    created_at: datetime
    title: str | None = None
    registry_reference: str | None = None
