"""Strong-typed definitions of the remote compiler version catalog (``list.json``)."""

from typing import Dict, List, Optional

from pydantic import ConfigDict, Field

from .utils import CamelModel


class Build(CamelModel):
    """One published compiler build."""

    model_config = ConfigDict(extra="ignore")

    path: str
    """Artifact filename relative to the catalog base URL."""
    version: str
    """Release version, e.g. '0.8.21'."""
    build: str = ""
    """Build metadata, e.g. 'commit.d9974bed'."""
    long_version: str = ""
    """Full version string, e.g. '0.8.21+commit.d9974bed'."""
    keccak256: str = ""
    """Published Keccak-256 hash of the artifact."""
    sha256: str = ""
    """Published SHA-256 hash of the artifact."""


class VersionList(CamelModel):
    """The catalog document served at ``<base>/list.json``."""

    model_config = ConfigDict(extra="ignore")

    builds: List[Build] = Field(default_factory=list)
    """All builds, including prereleases."""
    releases: Dict[str, str] = Field(default_factory=dict)
    """Mapping from release version to artifact filename."""
    latest_release: Optional[str] = None
    """The newest release version, when the catalog advertises one."""

    def find_build(self, version: str) -> Optional[Build]:
        """Find the build record for the release artifact of ``version``."""
        filename = self.releases.get(version)
        if filename is None:
            return None
        for build in self.builds:
            if build.path == filename:
                return build
        return None
