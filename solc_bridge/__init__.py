"""Drive the emscripten Solidity compiler from Python.

The typical workflow is:

1. Open a session: ``solc = new_with_version("0.8.21")``
2. Compile: ``output = solc.compile(input, import_callback=resolve)``
3. Inspect ``output.errors`` and ``output.contracts``, then ``solc.close()``
"""

from solc_bridge.artifacts import (
    ArtifactStore,
    CompilerArtifact,
    get_embedded_binary,
    get_embedded_versions,
)
from solc_bridge.data import (
    EVM,
    Build,
    Bytecode,
    CompileError,
    Contract,
    ImportCallback,
    ImportResult,
    Input,
    Optimizer,
    Output,
    Settings,
    SourceIn,
    VersionList,
)
from solc_bridge.engine import CompilerEngine, EngineMetadata, V8Engine
from solc_bridge.errors import (
    ArtifactError,
    BindingError,
    CatalogFetchError,
    ClosedSessionError,
    DownloadError,
    EngineCallError,
    EngineInitError,
    ImportResolutionFailedError,
    InvalidInputError,
    MarshalError,
    MaxDepthExceededError,
    SolcError,
    UnknownVersionError,
    UnmarshalError,
)
from solc_bridge.logging import configure_logging, get_logger
from solc_bridge.resolver import ImportResolver
from solc_bridge.session import Solc, new, new_with_version

__all__ = [
    # Session API
    "Solc",
    "new",
    "new_with_version",
    "ImportResolver",
    # Artifacts
    "ArtifactStore",
    "CompilerArtifact",
    "get_embedded_binary",
    "get_embedded_versions",
    # Engines
    "CompilerEngine",
    "EngineMetadata",
    "V8Engine",
    # Protocol types
    "Input",
    "SourceIn",
    "Settings",
    "Optimizer",
    "Output",
    "CompileError",
    "Contract",
    "EVM",
    "Bytecode",
    "ImportResult",
    "ImportCallback",
    "Build",
    "VersionList",
    # Errors
    "SolcError",
    "ArtifactError",
    "UnknownVersionError",
    "CatalogFetchError",
    "DownloadError",
    "EngineInitError",
    "EngineCallError",
    "BindingError",
    "InvalidInputError",
    "ImportResolutionFailedError",
    "MaxDepthExceededError",
    "MarshalError",
    "UnmarshalError",
    "ClosedSessionError",
    "configure_logging",
    "get_logger",
]
