"""
Local persistence of the recipient keypair.

The keypair is created on first use and reused across sessions. The private
key only ever lives in this directory; nothing here touches the network.
"""

import os
import tempfile
from pathlib import Path

import structlog

from evidence_vault.crypto.keys import (
    export_private_key,
    export_public_key,
    generate_keypair,
    import_private_key,
    import_public_key,
)
from evidence_vault.exceptions import KeyFormatError
from evidence_vault.models.crypto import KeyPair

logger = structlog.get_logger(__name__)

PRIVATE_KEY_FILE = "private_key"
PUBLIC_KEY_FILE = "public_key"


class KeyStore:
    """
    File-backed store for one recipient identity.

    Example:
        store = KeyStore(Path("~/.evidence_vault/keys").expanduser())
        keypair = store.load_or_create()
        share_with_sources(store.public_key_text())
    """

    def __init__(self, directory: Path | str) -> None:
        """
        Args:
            directory: Directory holding the key files. Created on first save.
        """
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def exists(self) -> bool:
        """Check if a private key is stored. The public half can be rebuilt from it."""
        return self._private_path.is_file()

    @property
    def _private_path(self) -> Path:
        return self._directory / PRIVATE_KEY_FILE

    @property
    def _public_path(self) -> Path:
        return self._directory / PUBLIC_KEY_FILE

    def load(self) -> KeyPair | None:
        """
        Load the stored keypair.

        A missing public key file is rebuilt from the private key.

        Returns:
            The keypair, or None if nothing is stored yet.

        Raises:
            KeyFormatError: If a key file is corrupt, the halves do not match,
                or a public key is stored without its private key.
        """
        if not self.exists:
            if self._public_path.exists():
                msg = "Public key is stored without its private key"
                raise KeyFormatError(msg, directory=str(self._directory))
            return None

        private_key = import_private_key(self._private_path.read_text(encoding="ascii"))
        derived_text = export_public_key(private_key.public_key())

        if not self._public_path.is_file():
            _atomic_write(self._public_path, derived_text, 0o644)
            logger.warning("Rebuilt missing public key file", directory=str(self._directory))
        elif export_public_key(
            import_public_key(self._public_path.read_text(encoding="ascii"))
        ) != derived_text:
            msg = "Stored public key does not match stored private key"
            raise KeyFormatError(msg, directory=str(self._directory))

        logger.debug("Loaded recipient keypair", directory=str(self._directory))
        return KeyPair(public_key=private_key.public_key(), private_key=private_key)

    def save(self, keypair: KeyPair) -> None:
        """Persist a keypair, replacing any stored one. Each file is swapped in atomically."""
        self._directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        _atomic_write(self._private_path, export_private_key(keypair.private_key), 0o600)
        _atomic_write(self._public_path, export_public_key(keypair.public_key), 0o644)
        logger.debug("Saved recipient keypair", directory=str(self._directory))

    def load_or_create(self) -> KeyPair:
        """
        Load the stored keypair, generating and saving one on first use.

        Never generates over an existing private key; use ``regenerate`` for that.
        """
        if (keypair := self.load()) is not None:
            return keypair
        keypair = generate_keypair()
        self.save(keypair)
        logger.info("Generated new recipient keypair", directory=str(self._directory))
        return keypair

    def regenerate(self) -> KeyPair:
        """
        Replace the stored keypair with a fresh one.

        Everything sealed to the previous public key becomes unreadable.
        """
        keypair = generate_keypair()
        self.save(keypair)
        logger.warning("Regenerated recipient keypair", directory=str(self._directory))
        return keypair

    def public_key_text(self) -> str:
        """Exported public key for sharing with senders, creating the keypair if needed."""
        return export_public_key(self.load_or_create().public_key)


def _atomic_write(path: Path, text: str, mode: int) -> None:
    # mkstemp creates the file 0o600, so the key is never briefly world-readable
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "w", encoding="ascii") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
