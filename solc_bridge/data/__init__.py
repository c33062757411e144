"""Data layer with strongly-typed models of the compiler JSON protocol."""

from .catalog import Build, VersionList
from .imports import ImportCallback, ImportResult
from .input import Input, Optimizer, Settings, SourceIn
from .json_codec import from_json, to_json
from .output import (
    EVM,
    Bytecode,
    CompileError,
    Contract,
    LinkReference,
    Output,
    SourceLocation,
    SourceOut,
)

__all__ = [
    # Input types
    "SourceIn",
    "Optimizer",
    "Settings",
    "Input",
    # Output types
    "SourceLocation",
    "CompileError",
    "LinkReference",
    "Bytecode",
    "EVM",
    "Contract",
    "SourceOut",
    "Output",
    # Catalog types
    "Build",
    "VersionList",
    # Import callback
    "ImportResult",
    "ImportCallback",
    # JSON functions
    "to_json",
    "from_json",
]
