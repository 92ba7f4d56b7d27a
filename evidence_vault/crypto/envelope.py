"""
Hybrid sealing of payloads to a recipient public key.

A fresh AES-256-GCM key encrypts the payload and is itself wrapped with
RSA-OAEP (SHA-256) under the recipient's public key. The 16-byte IV is used
as the GCM nonce directly, matching Node's ``aes-256-gcm`` with a 16-byte IV.
"""

import os

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from evidence_vault.crypto.keys import coerce_private_key, coerce_public_key
from evidence_vault.crypto.secure_bytes import SecureBytes
from evidence_vault.exceptions import CryptoBackendError, DecryptionFailed
from evidence_vault.models.crypto import IV_SIZE, SYMMETRIC_KEY_SIZE, TAG_SIZE, SealedBlob


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def seal(payload: bytes, recipient_public_key: rsa.RSAPublicKey | str | bytes) -> bytes:
    """
    Seal a payload so only the holder of the matching private key can open it.

    Args:
        payload: Arbitrary bytes, possibly empty.
        recipient_public_key: RSA public key, or its exported/PEM text as str or bytes.

    Returns:
        Sealed blob bytes: IV, auth tag, key length, wrapped key, ciphertext.

    Raises:
        KeyFormatError: If the key is not an RSA-2048+ public key.
        CryptoBackendError: If AES-GCM or RSA-OAEP is unavailable.
    """
    recipient_public_key = coerce_public_key(recipient_public_key)

    iv = os.urandom(IV_SIZE)
    with SecureBytes.random(SYMMETRIC_KEY_SIZE) as aes_key:
        try:
            sealed = AESGCM(bytes(aes_key)).encrypt(iv, payload, None)
            wrapped_key = recipient_public_key.encrypt(bytes(aes_key), _oaep())
        except UnsupportedAlgorithm as e:
            msg = f"Cipher primitives unavailable: {e}"
            raise CryptoBackendError(msg) from e

    blob = SealedBlob(
        iv=iv,
        auth_tag=sealed[-TAG_SIZE:],
        wrapped_key=wrapped_key,
        ciphertext=sealed[:-TAG_SIZE],
    )
    return blob.to_bytes()


def unseal(blob: bytes, recipient_private_key: rsa.RSAPrivateKey | str | bytes) -> bytes:
    """
    Open a sealed blob.

    Args:
        blob: Sealed blob bytes as produced by ``seal``.
        recipient_private_key: RSA private key, or its exported/PEM text as str or bytes.

    Returns:
        The original payload.

    Raises:
        DecryptionFailed: Wrong key or altered/truncated blob. The cause is
            deliberately not distinguished.
        KeyFormatError: If the key is not an RSA-2048+ private key.
        CryptoBackendError: If AES-GCM or RSA-OAEP is unavailable.
    """
    recipient_private_key = coerce_private_key(recipient_private_key)

    sealed = SealedBlob.from_bytes(blob)
    try:
        raw_key = recipient_private_key.decrypt(sealed.wrapped_key, _oaep())
    except UnsupportedAlgorithm as e:
        msg = f"Cipher primitives unavailable: {e}"
        raise CryptoBackendError(msg) from e
    except ValueError:
        raise DecryptionFailed() from None

    with SecureBytes(raw_key) as aes_key:
        if len(aes_key) != SYMMETRIC_KEY_SIZE:
            raise DecryptionFailed()
        try:
            return AESGCM(bytes(aes_key)).decrypt(
                sealed.iv, sealed.ciphertext + sealed.auth_tag, None
            )
        except InvalidTag:
            raise DecryptionFailed() from None
