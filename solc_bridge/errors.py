"""Exception hierarchy for solc_bridge.

Compiler diagnostics (syntax or type errors in the compiled sources) are not exceptions:
they are returned as data in :attr:`solc_bridge.data.Output.errors`.
"""

from typing import Optional


class SolcError(RuntimeError):
    """Base class for every error raised by solc_bridge."""


class ArtifactError(SolcError):
    """Raised when a compiler artifact cannot be obtained for a version."""

    def __init__(self, version: str, message: str) -> None:
        super().__init__(message)
        self.version = version


class UnknownVersionError(ArtifactError):
    """The remote catalog has no release for the requested version."""

    def __init__(self, version: str) -> None:
        super().__init__(version, f"version {version} not found in the release catalog")


class CatalogFetchError(ArtifactError):
    """The remote catalog could not be fetched or parsed."""


class DownloadError(ArtifactError):
    """The compiler artifact could not be downloaded."""


class EngineInitError(SolcError):
    """The compiler artifact failed to load or execute in the engine."""


class EngineCallError(SolcError):
    """A call into a loaded engine failed (JavaScript exception or disposed engine)."""


class BindingError(SolcError):
    """A required compiler entry point could not be bound as a callable."""

    def __init__(self, message: str, symbol: Optional[str] = None) -> None:
        super().__init__(message)
        self.symbol = symbol


class InvalidInputError(SolcError, ValueError):
    """The compile input is missing or malformed."""


class ImportResolutionFailedError(SolcError):
    """An import could not be resolved; the compiler was not invoked."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"import resolution failed for {path}: {message}")
        self.path = path
        self.message = message


class MaxDepthExceededError(ImportResolutionFailedError):
    """The import chain is deeper than the resolver allows."""

    def __init__(self, path: str, max_depth: int) -> None:
        super().__init__(path, f"maximum import depth {max_depth} exceeded")
        self.max_depth = max_depth


class MarshalError(SolcError):
    """The compile input could not be encoded to the compiler JSON protocol."""


class UnmarshalError(SolcError):
    """The compiler response could not be decoded."""


class ClosedSessionError(SolcError):
    """The compiler session has been closed."""

    def __init__(self, message: str = "compiler has been closed") -> None:
        super().__init__(message)
