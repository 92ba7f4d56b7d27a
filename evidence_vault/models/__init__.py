"""
Domain models for the evidence vault.

These are immutable (frozen) dataclasses representing the core domain concepts.
"""

from evidence_vault.models.crypto import KeyPair, SealedBlob
from evidence_vault.models.storage import ArchiveReceipt, BlobStatus, StoredBlob

__all__ = [
    # Crypto
    "KeyPair",
    "SealedBlob",
    # Storage
    "BlobStatus",
    "StoredBlob",
    "ArchiveReceipt",
]
