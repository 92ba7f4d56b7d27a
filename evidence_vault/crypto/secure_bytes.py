"""
Zeroable buffer for the per-seal AES key.

The key leaves the buffer only as a short-lived ``bytes`` copy handed to
AESGCM; the buffer itself is wiped as soon as its ``with`` block ends.
"""

import ctypes
import hmac
import os
from typing import Self


def _secure_zero(buffer: bytearray) -> None:
    """Overwrite ``buffer`` in place without reallocating it."""
    size = len(buffer)
    if size:
        view = (ctypes.c_char * size).from_buffer(buffer)
        ctypes.memset(ctypes.addressof(view), 0, size)
        del view


class SecureBytes:
    """Key bytes zeroed on ``clear``, on context exit and on collection."""

    __slots__ = ("_data", "_cleared")

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: bytes | bytearray) -> None:
        self._cleared = True
        self._data = bytearray(data)
        self._cleared = False

    @classmethod
    def random(cls, size: int) -> Self:
        """Draw ``size`` fresh bytes from ``os.urandom``."""
        if size <= 0:
            msg = "size must be positive"
            raise ValueError(msg)
        return cls(os.urandom(size))

    @property
    def is_cleared(self) -> bool:
        return self._cleared

    def clear(self) -> None:
        if not self._cleared:
            _secure_zero(self._data)
            self._cleared = True

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_: object) -> None:
        self.clear()

    def __del__(self) -> None:
        self.clear()

    def __bytes__(self) -> bytes:
        """Copy the key out. The copy is not wiped, so keep it short-lived."""
        if self._cleared:
            raise RuntimeError("SecureBytes has been cleared")
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return not self._cleared and bool(self._data)

    def __eq__(self, other: object) -> bool:
        """Constant-time comparison. A cleared buffer equals nothing."""
        if isinstance(other, SecureBytes):
            if other._cleared:
                return False
            other = other._data
        elif not isinstance(other, (bytes, bytearray)):
            return NotImplemented
        return not self._cleared and hmac.compare_digest(self._data, other)

    def __repr__(self) -> str:
        state = "cleared" if self._cleared else f"{len(self._data)} bytes"
        return f"SecureBytes(<{state}>)"
