"""
Business logic services for the evidence vault.
"""

from evidence_vault.services.archive_service import ArchiveService, is_sealed_title
from evidence_vault.services.protocol import ProvenanceRegistry
from evidence_vault.services.transfer_service import TransferService

__all__ = [
    "ArchiveService",
    "ProvenanceRegistry",
    "TransferService",
    "is_sealed_title",
]
