import hashlib

import pytest

from evidence_vault.crypto.fingerprint import fingerprint, fingerprint_hex, verify_fingerprint
from evidence_vault.exceptions import IntegrityError


def test_fingerprint_is_sha256_digest() -> None:
    assert fingerprint(b"evidence") == hashlib.sha256(b"evidence").digest()
    assert len(fingerprint(b"")) == 32


def test_fingerprint_is_stable() -> None:
    blob = b"\x00\x01" * 1000

    assert fingerprint(blob) == fingerprint(blob)
    assert fingerprint_hex(blob) == fingerprint(blob).hex()


def test_fingerprint_changes_on_single_byte_change() -> None:
    blob = bytearray(b"a" * 4096)
    original = fingerprint(bytes(blob))
    blob[2048] = ord("b")

    assert fingerprint(bytes(blob)) != original


def test_verify_fingerprint_accepts_matching_digest() -> None:
    verify_fingerprint(b"evidence", fingerprint(b"evidence"))


@pytest.mark.parametrize(
    "transform",
    [str.lower, str.upper, lambda h: "0x" + h, lambda h: f"  {h}\n"],
)
def test_verify_fingerprint_accepts_hex_forms(transform) -> None:
    verify_fingerprint(b"evidence", transform(fingerprint_hex(b"evidence")))


def test_verify_fingerprint_raises_on_mismatch() -> None:
    with pytest.raises(IntegrityError, match="Fingerprint mismatch"):
        verify_fingerprint(b"tampered", fingerprint_hex(b"evidence"))


def test_verify_fingerprint_raises_on_malformed_hex() -> None:
    with pytest.raises(IntegrityError, match="Malformed fingerprint"):
        verify_fingerprint(b"evidence", "not hex at all")


def test_verify_fingerprint_raises_on_wrong_length() -> None:
    with pytest.raises(IntegrityError, match="must be 32 bytes"):
        verify_fingerprint(b"evidence", "abcd")
