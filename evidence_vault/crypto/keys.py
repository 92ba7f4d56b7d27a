"""
Recipient keypair generation and text interchange.

Keys travel as base64 DER: SubjectPublicKeyInfo for public keys and
unencrypted PKCS#8 for private keys. PEM text is accepted on import too.
"""

import base64
import binascii

import structlog
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from evidence_vault.exceptions import CryptoBackendError, KeyFormatError
from evidence_vault.models.crypto import RSA_KEY_SIZE, RSA_PUBLIC_EXPONENT, KeyPair

logger = structlog.get_logger(__name__)

_PEM_MARKER = "-----BEGIN"


def generate_keypair() -> KeyPair:
    """
    Generate a fresh 2048-bit RSA keypair for a recipient identity.

    Raises:
        CryptoBackendError: If the backend cannot generate RSA keys.
    """
    try:
        private_key = rsa.generate_private_key(
            public_exponent=RSA_PUBLIC_EXPONENT, key_size=RSA_KEY_SIZE
        )
    except UnsupportedAlgorithm as e:
        msg = f"RSA key generation unavailable: {e}"
        raise CryptoBackendError(msg) from e
    logger.debug("Generated recipient keypair", key_size=RSA_KEY_SIZE)
    return KeyPair(public_key=private_key.public_key(), private_key=private_key)


def export_public_key(key: rsa.RSAPublicKey) -> str:
    """Export a public key as base64 DER SubjectPublicKeyInfo."""
    der = key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(der).decode("ascii")


def export_private_key(key: rsa.RSAPrivateKey) -> str:
    """
    Export a private key as base64 DER PKCS#8.

    The result is unencrypted; callers persist it only in the local key store.
    """
    der = key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return base64.b64encode(der).decode("ascii")


def import_public_key(text: str) -> rsa.RSAPublicKey:
    """
    Import a public key from base64 DER or PEM text.

    Raises:
        KeyFormatError: If the text is not an RSA public key.
    """
    try:
        if _PEM_MARKER in text:
            key = serialization.load_pem_public_key(text.strip().encode("ascii"))
        else:
            key = serialization.load_der_public_key(_decode_base64(text))
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        msg = f"Invalid public key: {e}"
        raise KeyFormatError(msg) from e

    if not isinstance(key, rsa.RSAPublicKey):
        msg = f"Expected an RSA public key, got {type(key).__name__}"
        raise KeyFormatError(msg)
    _check_key_size(key.key_size)
    return key


def import_private_key(text: str) -> rsa.RSAPrivateKey:
    """
    Import a private key from base64 DER (PKCS#8) or PEM text.

    Raises:
        KeyFormatError: If the text is not an unencrypted RSA private key.
    """
    try:
        if _PEM_MARKER in text:
            key = serialization.load_pem_private_key(text.strip().encode("ascii"), password=None)
        else:
            key = serialization.load_der_private_key(_decode_base64(text), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        # Exception text from the parser never carries key bytes.
        msg = f"Invalid private key: {e}"
        raise KeyFormatError(msg) from e

    if not isinstance(key, rsa.RSAPrivateKey):
        msg = f"Expected an RSA private key, got {type(key).__name__}"
        raise KeyFormatError(msg)
    _check_key_size(key.key_size)
    return key


def _decode_base64(text: str) -> bytes:
    compact = "".join(text.split())
    if not compact:
        raise ValueError("empty key text")
    try:
        return base64.b64decode(compact, validate=True)
    except binascii.Error as e:
        raise ValueError(f"not base64: {e}") from e


def _check_key_size(key_size: int) -> None:
    if key_size < RSA_KEY_SIZE:
        msg = f"RSA key too small: {key_size} bits (minimum {RSA_KEY_SIZE})"
        raise KeyFormatError(msg)


def coerce_public_key(key: rsa.RSAPublicKey | str | bytes) -> rsa.RSAPublicKey:
    """
    Accept a public key object or its exported/PEM text (str or ASCII bytes).

    Raises:
        KeyFormatError: If the key is not a usable RSA-2048+ public key.
    """
    if isinstance(key, (str, bytes)):
        return import_public_key(_as_text(key))
    if not isinstance(key, rsa.RSAPublicKey):
        msg = f"Expected an RSA public key, got {type(key).__name__}"
        raise KeyFormatError(msg)
    _check_key_size(key.key_size)
    return key


def coerce_private_key(key: rsa.RSAPrivateKey | str | bytes) -> rsa.RSAPrivateKey:
    """
    Accept a private key object or its exported/PEM text (str or ASCII bytes).

    Raises:
        KeyFormatError: If the key is not a usable RSA-2048+ private key.
    """
    if isinstance(key, (str, bytes)):
        return import_private_key(_as_text(key))
    if not isinstance(key, rsa.RSAPrivateKey):
        msg = f"Expected an RSA private key, got {type(key).__name__}"
        raise KeyFormatError(msg)
    _check_key_size(key.key_size)
    return key


def _as_text(key: str | bytes) -> str:
    if isinstance(key, str):
        return key
    try:
        return key.decode("ascii")
    except UnicodeDecodeError as e:
        msg = "Key bytes must be ASCII PEM or base64 text"
        raise KeyFormatError(msg) from e
