import os

import pytest


def pytest_collection_modifyitems(config: pytest.Config, items: list) -> None:
    if os.getenv("EVIDENCE_VAULT_LIVE") == "1":
        return
    mark_expr = getattr(config.option, "markexpr", "")
    if "integration" in mark_expr:
        return
    skip = pytest.mark.skip(reason="EVIDENCE_VAULT_LIVE=1 not set")
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip)
