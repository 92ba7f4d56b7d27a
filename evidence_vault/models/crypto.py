"""
Cryptographic domain models.
"""

import struct
from dataclasses import dataclass
from typing import Self

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from evidence_vault.exceptions import DecryptionFailed

IV_SIZE = 16
TAG_SIZE = 16
KEY_LENGTH_SIZE = 2
HEADER_SIZE = IV_SIZE + TAG_SIZE + KEY_LENGTH_SIZE
SYMMETRIC_KEY_SIZE = 32
RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

_KEY_LENGTH = struct.Struct(">H")


@dataclass(frozen=True, slots=True)
class KeyPair:
    """
    Recipient RSA keypair.

    Attributes:
        public_key: Shared with senders, only used to seal.
        private_key: Never leaves the local key store, only used to unseal.
    """

    public_key: RSAPublicKey
    private_key: RSAPrivateKey

    def __repr__(self) -> str:
        return f"KeyPair(<RSA-{self.public_key.key_size}>)"


@dataclass(frozen=True, kw_only=True)
class SealedBlob:
    """
    Hybrid-encrypted payload.

    Wire layout, in order:
    [IV (16)] [AuthTag (16)] [KeyLength (2, big-endian)] [WrappedKey] [Ciphertext]
    """

    iv: bytes
    auth_tag: bytes
    wrapped_key: bytes
    ciphertext: bytes

    def __post_init__(self) -> None:
        if len(self.iv) != IV_SIZE:
            msg = f"IV must be {IV_SIZE} bytes, got {len(self.iv)}"
            raise ValueError(msg)
        if len(self.auth_tag) != TAG_SIZE:
            msg = f"Auth tag must be {TAG_SIZE} bytes, got {len(self.auth_tag)}"
            raise ValueError(msg)
        if len(self.wrapped_key) > 0xFFFF:
            msg = f"Wrapped key too long: {len(self.wrapped_key)} bytes"
            raise ValueError(msg)

    def __len__(self) -> int:
        return HEADER_SIZE + len(self.wrapped_key) + len(self.ciphertext)

    def to_bytes(self) -> bytes:
        return b"".join(
            (
                self.iv,
                self.auth_tag,
                _KEY_LENGTH.pack(len(self.wrapped_key)),
                self.wrapped_key,
                self.ciphertext,
            )
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        """
        Parse a sealed blob.

        Raises:
            DecryptionFailed: If the blob is truncated or its key length
                points past the end of the buffer.
        """
        if len(data) < HEADER_SIZE:
            raise DecryptionFailed()

        (key_length,) = _KEY_LENGTH.unpack_from(data, IV_SIZE + TAG_SIZE)
        key_end = HEADER_SIZE + key_length
        if key_length == 0 or key_end > len(data):
            raise DecryptionFailed()

        return cls(
            iv=bytes(data[:IV_SIZE]),
            auth_tag=bytes(data[IV_SIZE : IV_SIZE + TAG_SIZE]),
            wrapped_key=bytes(data[HEADER_SIZE:key_end]),
            ciphertext=bytes(data[key_end:]),
        )
