"""Resolution of compiler artifacts: bundled table, then disk cache, then remote catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Mapping, Optional

from solc_bridge.data import VersionList, from_json
from solc_bridge.env import get_solc_binaries_url, get_solc_cache_path
from solc_bridge.errors import (
    CatalogFetchError,
    DownloadError,
    UnknownVersionError,
    UnmarshalError,
)
from solc_bridge.logging import get_logger

from .bundled import bundled_artifacts
from .cache import load_cached_binary, save_binary_to_cache
from .download import HttpGet, http_get

logger = get_logger("ArtifactStore")


@dataclass(frozen=True)
class CompilerArtifact:
    """A loaded compiler program and the version it was resolved for."""

    version: str
    """The requested version, e.g. '0.8.21'."""
    source: str = field(repr=False)
    """The emscripten compiler script (soljson.js)."""
    origin: Literal["bundled", "cache", "remote"]
    """Where the artifact came from."""


class ArtifactStore:
    """Maps a version identifier to compiler artifact source.

    Lookup order:

    1. The bundled table (in-memory, no I/O).
    2. The on-disk cache at ``<cache_root>/<version>/soljson.js``.
    3. The remote catalog: fetch ``<base_url>/list.json``, look up ``releases[version]``,
       download ``<base_url>/<filename>`` and write it to the cache (best effort).

    Concurrent first use of the same uncached version may download twice; both writes
    produce a valid cache file and the last writer wins.
    """

    def __init__(
        self,
        bundled: Optional[Mapping[str, str]] = None,
        cache_root: Optional[Path] = None,
        base_url: Optional[str] = None,
        fetch: Optional[HttpGet] = None,
    ) -> None:
        """Initialize the store.

        Parameters
        ----------
        bundled : Optional[Mapping[str, str]]
            Version to artifact source table. Defaults to the artifacts shipped with the
            package.
        cache_root : Optional[Path]
            Root of the on-disk cache. Defaults to ``SOLC_CACHE_PATH`` (read at each call).
        base_url : Optional[str]
            Base URL of the remote catalog. Defaults to ``SOLC_BINARIES_URL``.
        fetch : Optional[HttpGet]
            HTTP GET implementation, mainly for tests. Defaults to urllib.
        """
        self._bundled = bundled
        self._cache_root = cache_root
        self._base_url = base_url.rstrip("/") if base_url else None
        self._fetch = fetch or http_get

    @property
    def cache_root(self) -> Path:
        return self._cache_root if self._cache_root is not None else get_solc_cache_path()

    @property
    def base_url(self) -> str:
        return self._base_url if self._base_url is not None else get_solc_binaries_url()

    @property
    def bundled(self) -> Mapping[str, str]:
        return self._bundled if self._bundled is not None else bundled_artifacts()

    def resolve_artifact(self, version: str) -> CompilerArtifact:
        """Get the compiler artifact for ``version``.

        Parameters
        ----------
        version : str
            Release version, e.g. '0.8.21'.

        Returns
        -------
        CompilerArtifact
            The artifact, tagged with where it was found.

        Raises
        ------
        CatalogFetchError
            If the catalog cannot be fetched or parsed.
        UnknownVersionError
            If the catalog has no release for ``version``.
        DownloadError
            If the artifact download fails.
        """
        source = self.bundled.get(version)
        if source is not None:
            logger.debug(f"Using bundled compiler {version}")
            return CompilerArtifact(version=version, source=source, origin="bundled")

        cache_root = self.cache_root
        source = load_cached_binary(cache_root, version)
        if source is not None:
            logger.debug(f"Using cached compiler {version} from {cache_root}")
            return CompilerArtifact(version=version, source=source, origin="cache")

        filename = self.resolve_filename(version)
        source = self._download(version, filename)

        try:
            path = save_binary_to_cache(cache_root, version, source)
            logger.info(f"Cached compiler {version} at {path}")
        except OSError as e:
            logger.warning(f"Failed to cache compiler binary for version {version}: {e}")

        return CompilerArtifact(version=version, source=source, origin="remote")

    def fetch_version_list(self) -> VersionList:
        """Fetch and parse the remote catalog.

        Raises
        ------
        CatalogFetchError
            On transport failure, non-2xx status or an unparsable document.
        """
        return self._load_version_list()

    def resolve_filename(self, version: str) -> str:
        """Look up the artifact filename of ``version`` in the remote catalog.

        Raises
        ------
        CatalogFetchError
            If the catalog cannot be fetched.
        UnknownVersionError
            If the version is not a published release.
        """
        versions = self._load_version_list(version)
        filename = versions.releases.get(version)
        if filename is None:
            raise UnknownVersionError(version)
        return filename

    def latest_release(self) -> str:
        """Get the newest release version advertised by the remote catalog.

        Falls back to the highest version among ``releases`` when the catalog has no
        ``latestRelease`` field.

        Raises
        ------
        CatalogFetchError
            If the catalog cannot be fetched or lists no releases.
        """
        versions = self.fetch_version_list()
        if versions.latest_release:
            return versions.latest_release
        if not versions.releases:
            raise CatalogFetchError("", "version list contains no releases")
        return max(versions.releases, key=_version_key)

    def _load_version_list(self, version: str = "") -> VersionList:
        url = f"{self.base_url}/list.json"
        wanted = f" (resolving version {version})" if version else ""
        logger.info(f"Fetching compiler catalog {url}")
        try:
            body = self._fetch(url)
        except OSError as e:
            raise CatalogFetchError(
                version, f"failed to fetch version list from {url}{wanted}: {e}"
            ) from e
        try:
            return from_json(body, VersionList)
        except UnmarshalError as e:
            raise CatalogFetchError(
                version, f"failed to parse version list from {url}{wanted}: {e}"
            ) from e

    def _download(self, version: str, filename: str) -> str:
        url = f"{self.base_url}/{filename}"
        logger.info(f"Downloading compiler {version} from {url}")
        try:
            body = self._fetch(url)
        except OSError as e:
            raise DownloadError(
                version, f"failed to download solc binary for version {version}: {e}"
            ) from e
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DownloadError(
                version, f"solc binary for version {version} is not valid text: {e}"
            ) from e


def _version_key(version: str):
    parts = []
    for piece in version.split("."):
        parts.append(int(piece) if piece.isdigit() else -1)
    return tuple(parts)
