"""
Content fingerprints for tamper evidence.

The digest is taken over the exact bytes handed to storage (post-sealing when
sealing applies), so an externally recorded value covers what is stored.
"""

import hashlib
import hmac

from evidence_vault.exceptions import IntegrityError

DIGEST_SIZE = 32


def fingerprint(blob: bytes) -> bytes:
    """SHA-256 digest of ``blob``."""
    return hashlib.sha256(blob).digest()


def fingerprint_hex(blob: bytes) -> str:
    """Lowercase hex SHA-256 digest of ``blob``."""
    return hashlib.sha256(blob).hexdigest()


def verify_fingerprint(blob: bytes, expected: bytes | str) -> None:
    """
    Check ``blob`` against an externally recorded fingerprint.

    Args:
        blob: Bytes as read back from storage.
        expected: Raw 32-byte digest, or hex text with optional ``0x`` prefix.

    Raises:
        IntegrityError: If the fingerprint is malformed or does not match.
    """
    expected_digest = _normalize(expected)
    computed = fingerprint(blob)
    if hmac.compare_digest(computed, expected_digest):
        return
    msg = f"Fingerprint mismatch: expected {expected_digest.hex()}, got {computed.hex()}"
    raise IntegrityError(msg)


def _normalize(expected: bytes | str) -> bytes:
    if isinstance(expected, str):
        text = expected.strip().lower().removeprefix("0x")
        try:
            expected = bytes.fromhex(text)
        except ValueError as e:
            msg = f"Malformed fingerprint: {e}"
            raise IntegrityError(msg) from e
    if len(expected) != DIGEST_SIZE:
        msg = f"Fingerprint must be {DIGEST_SIZE} bytes, got {len(expected)}"
        raise IntegrityError(msg)
    return bytes(expected)
