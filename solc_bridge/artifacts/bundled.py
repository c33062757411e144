"""Compiler artifacts shipped inside the package.

The table is built once on first use from the ``bundled/`` package data directory and is
read-only afterwards. A release listed in ``BUNDLED_RELEASES`` whose file is not present in
the installed package is not part of the table.
"""

from functools import lru_cache
from importlib import resources
from types import MappingProxyType
from typing import List, Mapping, Optional

BUNDLED_RELEASES: Mapping[str, str] = MappingProxyType(
    {
        "0.8.30": "soljson-v0.8.30+commit.73712a01.js",
        "0.8.21": "soljson-v0.8.21+commit.d9974bed.js",
    }
)
"""Release version to artifact filename for every version the package may bundle."""


@lru_cache(maxsize=None)
def bundled_artifacts() -> Mapping[str, str]:
    """Get the immutable table of bundled compiler sources keyed by version."""
    root = resources.files(__package__) / "bundled"
    table = {}
    for version, filename in BUNDLED_RELEASES.items():
        resource = root / filename
        if resource.is_file():
            table[version] = resource.read_text(encoding="utf-8")
    return MappingProxyType(table)


def get_embedded_binary(version: str) -> Optional[str]:
    """Get the bundled compiler source for ``version``, or None if it is not bundled."""
    return bundled_artifacts().get(version)


def get_embedded_versions() -> List[str]:
    """List the versions available without network or disk cache access."""
    return sorted(bundled_artifacts())
