"""On-disk compiler cache laid out as ``<cache-root>/<version>/soljson.js``.

A non-empty file is the only "present" signal: no metadata file or integrity hash is kept.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

ARTIFACT_FILENAME = "soljson.js"
"""Name of the cached artifact inside its version directory."""


def cached_binary_path(cache_root: Path, version: str) -> Path:
    """Get the cache path of the artifact for ``version``."""
    return cache_root / version / ARTIFACT_FILENAME


def load_cached_binary(cache_root: Path, version: str) -> Optional[str]:
    """Read the cached artifact for ``version``.

    Returns
    -------
    Optional[str]
        The artifact source, or None if the file is missing, empty or unreadable.
    """
    path = cached_binary_path(cache_root, version)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return content or None


def save_binary_to_cache(cache_root: Path, version: str, content: str) -> Path:
    """Write the artifact for ``version`` into the cache.

    The file is written to a temporary name and moved into place, so readers never see a
    partial file. Concurrent writers for the same version race; the last one wins.

    Raises
    ------
    OSError
        If the directory or file cannot be written.
    """
    path = cached_binary_path(cache_root, version)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".soljson-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path
