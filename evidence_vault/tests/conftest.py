import pytest

from evidence_vault.config import EvidenceVaultConfig
from evidence_vault.crypto.keys import generate_keypair
from evidence_vault.models.crypto import KeyPair
from evidence_vault.tests.utils.mock_transport import PoolTransport

PUBLISHERS = (
    "https://pub-1.test",
    "https://pub-2.test",
    "https://pub-3.test",
    "https://pub-4.test",
)
AGGREGATORS = (
    "https://agg-1.test",
    "https://agg-2.test",
    "https://agg-3.test",
    "https://agg-4.test",
)


@pytest.fixture(scope="session")
def keypair() -> KeyPair:
    return generate_keypair()


@pytest.fixture(scope="session")
def other_keypair() -> KeyPair:
    return generate_keypair()


@pytest.fixture
def config(tmp_path) -> EvidenceVaultConfig:
    return EvidenceVaultConfig(
        publishers=PUBLISHERS,
        aggregators=AGGREGATORS,
        timeout=5.0,
        key_store_dir=tmp_path / "keys",
    )


@pytest.fixture
def pool_transport() -> PoolTransport:
    return PoolTransport()
