"""
Evidence Vault.

Hybrid-sealed, fingerprinted evidence archives stored through a pool of
interchangeable storage endpoints with automatic failover.

Example:
    ```python
    from evidence_vault import EvidenceVaultClient, generate_keypair, export_public_key

    keypair = generate_keypair()
    share = export_public_key(keypair.public_key)

    async with EvidenceVaultClient() as client:
        receipt = await client.archive(b"evidence", recipient_public_key=share)
        data = await client.retrieve(
            receipt.handle,
            expected_fingerprint=receipt.fingerprint_hex,
            private_key=keypair.private_key,
        )
    ```
"""

from evidence_vault.client import EvidenceVaultClient
from evidence_vault.config import EvidenceVaultConfig
from evidence_vault.crypto.envelope import seal, unseal
from evidence_vault.crypto.fingerprint import fingerprint, fingerprint_hex, verify_fingerprint
from evidence_vault.crypto.key_store import KeyStore
from evidence_vault.crypto.keys import (
    export_private_key,
    export_public_key,
    generate_keypair,
    import_private_key,
    import_public_key,
)
from evidence_vault.exceptions import (
    AllEndpointsExhausted,
    CryptoBackendError,
    CryptoError,
    DecryptionFailed,
    EndpointAttemptFailed,
    EvidenceVaultError,
    IntegrityError,
    KeyFormatError,
    RegistryError,
    TransferError,
)
from evidence_vault.models.crypto import KeyPair
from evidence_vault.models.storage import ArchiveReceipt
from evidence_vault.services.archive_service import ArchiveService
from evidence_vault.services.protocol import ProvenanceRegistry
from evidence_vault.services.transfer_service import TransferService

__version__ = "0.1.0"

__all__ = [
    # Main client
    "EvidenceVaultClient",
    "EvidenceVaultConfig",
    # Keys
    "KeyPair",
    "KeyStore",
    "generate_keypair",
    "export_public_key",
    "export_private_key",
    "import_public_key",
    "import_private_key",
    # Sealing and fingerprints
    "seal",
    "unseal",
    "fingerprint",
    "fingerprint_hex",
    "verify_fingerprint",
    # Services
    "ArchiveReceipt",
    "ArchiveService",
    "ProvenanceRegistry",
    "TransferService",
    # Exceptions
    "EvidenceVaultError",
    "CryptoError",
    "KeyFormatError",
    "CryptoBackendError",
    "DecryptionFailed",
    "IntegrityError",
    "TransferError",
    "EndpointAttemptFailed",
    "AllEndpointsExhausted",
    "RegistryError",
]
