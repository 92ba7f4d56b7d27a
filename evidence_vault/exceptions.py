"""
Evidence vault exception hierarchy.

All exceptions inherit from EvidenceVaultError for easy catching.
"""

from typing import Any


class EvidenceVaultError(Exception):
    """Base exception for all evidence_vault errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class CryptoError(EvidenceVaultError):
    """Cryptographic operation failed."""


class KeyFormatError(CryptoError):
    """Key text could not be parsed into the expected RSA key."""


class CryptoBackendError(CryptoError):
    """Underlying cipher primitives are unavailable or misconfigured."""


class DecryptionFailed(CryptoError):
    """
    Sealed blob could not be opened.

    Raised for a wrong key and for any corruption alike, so the cause
    is never revealed to the caller.
    """

    def __init__(self, message: str = "Not your evidence or corrupted") -> None:
        super().__init__(message)


class IntegrityError(CryptoError):
    """Stored bytes do not match the recorded fingerprint."""


class TransferError(EvidenceVaultError):
    """Storage transfer failed."""


class EndpointAttemptFailed(TransferError):
    """A single storage endpoint failed (status, transport error, bad response)."""

    def __init__(
        self, message: str, *, endpoint: str, status_code: int | None = None
    ) -> None:
        super().__init__(message, endpoint=endpoint, status_code=status_code)
        self.endpoint = endpoint
        self.status_code = status_code


class AllEndpointsExhausted(TransferError):
    """Every endpoint in the pool failed."""

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        attempts: int,
        last_error: EndpointAttemptFailed | None = None,
    ) -> None:
        super().__init__(message, operation=operation, attempts=attempts)
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error


class RegistryError(EvidenceVaultError):
    """
    Recording in the provenance registry failed after the blob was stored.

    ``receipt`` is the complete receipt minus the registry reference, so the
    archive can be recorded later without uploading it again.
    """

    def __init__(self, message: str, *, receipt: Any) -> None:
        super().__init__(
            message, handle=receipt.handle, fingerprint_hex=receipt.fingerprint_hex
        )
        self.receipt = receipt
