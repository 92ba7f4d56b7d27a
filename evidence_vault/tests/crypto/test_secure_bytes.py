import gc

import pytest

from evidence_vault.crypto.secure_bytes import SecureBytes, _secure_zero


def test_random_produces_requested_size() -> None:
    key = SecureBytes.random(32)

    assert len(key) == 32
    assert len(bytes(key)) == 32
    key.clear()


def test_random_is_fresh_each_call() -> None:
    with SecureBytes.random(32) as first, SecureBytes.random(32) as second:
        assert first != second


@pytest.mark.parametrize("size", [0, -1])
def test_random_rejects_non_positive_size(size: int) -> None:
    with pytest.raises(ValueError, match="size must be positive"):
        SecureBytes.random(size)


def test_original_data_not_modified_after_clear() -> None:
    original = bytearray(b"aes-key")
    key = SecureBytes(original)
    key.clear()

    assert original == bytearray(b"aes-key")


def test_clear_zeros_data_and_sets_flag() -> None:
    key = SecureBytes(b"aes-key")
    key.clear()

    assert key.is_cleared
    assert key._data == bytearray(7)


def test_clear_is_idempotent() -> None:
    key = SecureBytes(b"aes-key")
    key.clear()
    key.clear()

    assert key.is_cleared


def test_context_manager_clears_on_exit() -> None:
    with SecureBytes(b"aes-key") as key:
        assert not key.is_cleared
    assert key.is_cleared


def test_context_manager_clears_on_error() -> None:
    with pytest.raises(RuntimeError, match="boom"):
        with SecureBytes(b"aes-key") as key:
            raise RuntimeError("boom")
    assert key.is_cleared


def test_destructor_clears_data() -> None:
    key = SecureBytes(b"aes-key")
    data_reference = key._data

    del key
    gc.collect()

    assert all(byte == 0 for byte in data_reference)


def test_bytes_conversion_after_clear_raises_runtime_error() -> None:
    key = SecureBytes(b"aes-key")
    key.clear()

    with pytest.raises(RuntimeError, match="SecureBytes has been cleared"):
        bytes(key)


def test_equality_with_bytes() -> None:
    key = SecureBytes(b"aes-key")

    assert key == b"aes-key"
    assert key != b"other"
    key.clear()


def test_cleared_secure_bytes_not_equal() -> None:
    first = SecureBytes(b"aes-key")
    second = SecureBytes(b"aes-key")
    first.clear()

    assert first != second
    second.clear()


def test_not_hashable() -> None:
    with SecureBytes(b"aes-key") as key:
        with pytest.raises(TypeError, match="unhashable"):
            hash(key)


def test_bool_false_when_cleared() -> None:
    key = SecureBytes(b"aes-key")
    assert bool(key) is True
    key.clear()
    assert bool(key) is False


def test_repr_hides_contents() -> None:
    key = SecureBytes(b"aes-key")
    assert repr(key) == "SecureBytes(<7 bytes>)"
    key.clear()
    assert repr(key) == "SecureBytes(<cleared>)"


def test_secure_zero_clears_bytearray() -> None:
    data = bytearray(b"sensitive")
    _secure_zero(data)
    assert all(byte == 0 for byte in data)


def test_secure_zero_handles_empty_bytearray() -> None:
    data = bytearray()
    _secure_zero(data)
    assert len(data) == 0


def test_failed_construction_does_not_raise_on_collection(monkeypatch) -> None:
    unraisable = []
    monkeypatch.setattr("sys.unraisablehook", unraisable.append)

    with pytest.raises(TypeError):
        SecureBytes(object())  # type: ignore[arg-type]
    gc.collect()

    assert unraisable == []
