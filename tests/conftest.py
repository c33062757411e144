import os
from pathlib import Path
from typing import List

import pytest


def _network_tests_enabled() -> bool:
    """Check if tests that download compilers from the remote catalog should run.

    Returns
    -------
    bool
        True if SOLC_RUN_NETWORK_TESTS is set to 1, False otherwise.
    """
    return os.environ.get("SOLC_RUN_NETWORK_TESTS") == "1"


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    """Skip tests that require the network unless they are explicitly enabled."""
    if _network_tests_enabled():
        return

    skip_network = pytest.mark.skip(reason="set SOLC_RUN_NETWORK_TESTS=1 to run network tests")
    for item in items:
        if any(item.iter_markers(name="requires_network")):
            item.add_marker(skip_network)


@pytest.fixture
def tmp_cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Use isolated temporary directory for the compiler cache.

    This fixture sets SOLC_CACHE_PATH to a unique temporary directory for each test,
    preventing cache pollution between tests and of the user's real cache.
    """
    cache_dir = tmp_path / "solc-cache"
    monkeypatch.setenv("SOLC_CACHE_PATH", str(cache_dir))
    return cache_dir
