"""Compiler artifact acquisition.

Artifacts are resolved from, in order, the bundled table, the on-disk cache and the
remote release catalog:

>>> store = ArtifactStore()
>>> artifact = store.resolve_artifact("0.8.21")
>>> artifact.origin
'remote'
"""

from .bundled import BUNDLED_RELEASES, get_embedded_binary, get_embedded_versions
from .cache import ARTIFACT_FILENAME, cached_binary_path
from .download import HttpGet, http_get
from .store import ArtifactStore, CompilerArtifact

__all__ = [
    "ArtifactStore",
    "CompilerArtifact",
    "BUNDLED_RELEASES",
    "get_embedded_binary",
    "get_embedded_versions",
    "ARTIFACT_FILENAME",
    "cached_binary_path",
    "HttpGet",
    "http_get",
]
