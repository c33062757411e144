"""Environment-driven configuration for solc_bridge."""

import os
from pathlib import Path

DEFAULT_BINARIES_URL = "https://binaries.soliditylang.org/bin"
"""Base URL of the official compiler binary catalog."""


def get_solc_cache_path() -> Path:
    """Get the root directory of the on-disk compiler cache.

    Returns
    -------
    Path
        ``$SOLC_CACHE_PATH`` if set, otherwise ``~/solc``.
    """
    base = os.environ.get("SOLC_CACHE_PATH")
    return Path(base) if base else Path.home() / "solc"


def get_solc_binaries_url() -> str:
    """Get the base URL of the remote version catalog, without a trailing slash."""
    return os.environ.get("SOLC_BINARIES_URL", DEFAULT_BINARIES_URL).rstrip("/")


def get_solc_download_timeout() -> float:
    """Get the socket timeout in seconds used for catalog and binary downloads."""
    value = os.environ.get("SOLC_DOWNLOAD_TIMEOUT")
    if not value:
        return 60.0
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"SOLC_DOWNLOAD_TIMEOUT must be a number, got {value!r}") from None


def get_solc_debug() -> bool:
    """Whether verbose tracing of engine bridge calls is enabled (``SOLC_DEBUG=1``)."""
    return os.environ.get("SOLC_DEBUG") == "1"
