"""
Cryptographic operations for the evidence vault.

This module provides:
- RSA-2048 recipient keypairs and their text interchange
- Hybrid RSA-OAEP / AES-256-GCM sealing and unsealing
- SHA-256 content fingerprints
- Local keypair persistence
- Secure memory handling
"""

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
from evidence_vault.crypto.secure_bytes import SecureBytes

__all__ = [
    "SecureBytes",
    "KeyStore",
    "generate_keypair",
    "export_public_key",
    "export_private_key",
    "import_public_key",
    "import_private_key",
    "seal",
    "unseal",
    "fingerprint",
    "fingerprint_hex",
    "verify_fingerprint",
]
