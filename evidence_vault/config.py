"""
Evidence vault configuration.
"""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PUBLISHERS = (
    "https://publisher.walrus-testnet.walrus.space",
    "https://walrus-testnet-publisher.stakely.io",
    "https://walrus-testnet-publisher.nodes.guru",
    "https://testnet-walrus-publisher.staketab.org",
)

DEFAULT_AGGREGATORS = (
    "https://walrus-testnet-aggregator.nodes.guru",
    "https://walrus-testnet-aggregator.stakely.io",
    "https://aggregator.walrus-testnet.walrus.space",
    "https://testnet-walrus-aggregator.staketab.org",
)


def _default_key_store_dir() -> Path:
    return Path.home() / ".evidence_vault" / "keys"


def _normalize_pool(urls: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    return tuple(url.rstrip("/") for url in urls)


@dataclass(frozen=True, kw_only=True)
class EvidenceVaultConfig:
    """
    Attributes:
        publishers: Ordered write pool of storage base URLs.
        aggregators: Ordered read pool of storage base URLs.
        timeout: Per-endpoint attempt timeout in seconds.
        storage_epochs: Number of epochs a stored blob is kept for.
        shuffle_endpoints: Shuffle the pool order on every call.
        user_agent: User-Agent header value.
        key_store_dir: Local directory holding the recipient keypair.
    """

    publishers: tuple[str, ...] = DEFAULT_PUBLISHERS
    aggregators: tuple[str, ...] = DEFAULT_AGGREGATORS
    timeout: float = 30.0
    storage_epochs: int = 5
    shuffle_endpoints: bool = False
    user_agent: str = "EvidenceVault-Python/1.0"
    key_store_dir: Path = field(default_factory=_default_key_store_dir)

    def __post_init__(self) -> None:
        object.__setattr__(self, "publishers", _normalize_pool(self.publishers))
        object.__setattr__(self, "aggregators", _normalize_pool(self.aggregators))
        object.__setattr__(self, "key_store_dir", Path(self.key_store_dir))
        if not self.publishers:
            msg = "publishers must not be empty"
            raise ValueError(msg)
        if not self.aggregators:
            msg = "aggregators must not be empty"
            raise ValueError(msg)
        for url in (*self.publishers, *self.aggregators):
            if not url.startswith(("http://", "https://")):
                msg = f"endpoint must be an http(s) URL: {url!r}"
                raise ValueError(msg)
        if self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if self.storage_epochs <= 0:
            msg = "storage_epochs must be positive"
            raise ValueError(msg)
