"""Strong-typed definitions of the compiler standard JSON input."""

from typing import Dict, List, Optional

from pydantic import ConfigDict, Field

from .utils import CamelModel, NonEmptyString


class SourceIn(CamelModel):
    """A single source unit handed to the compiler."""

    content: str
    """The complete text of the source file."""


class Optimizer(CamelModel):
    """Optimizer settings."""

    enabled: bool = False
    """Whether the bytecode optimizer runs."""
    runs: int = Field(default=200, ge=0)
    """Estimated number of contract executions the optimizer tunes for."""


class Settings(CamelModel):
    """Compiler settings.

    Only the fields below are interpreted by solc_bridge; everything else is passed through
    to the compiler unchanged.
    """

    model_config = ConfigDict(extra="allow")

    optimizer: Optimizer = Field(default_factory=Optimizer)
    """Optimizer flags."""
    evm_version: Optional[str] = None
    """Target EVM version (e.g. 'byzantium', 'paris'). Compiler default when unset."""
    output_selection: Dict[str, Dict[str, List[str]]] = Field(default_factory=dict)
    """Output selection matrix keyed by file (or '*'), then contract (or '*'), listing the
    selectors to emit (e.g. 'abi', 'evm.bytecode.object')."""


class Input(CamelModel):
    """A compile request in the compiler's standard JSON format."""

    language: NonEmptyString = "Solidity"
    """The source language tag."""
    sources: Dict[str, SourceIn] = Field(default_factory=dict)
    """Mapping from logical file path to source content."""
    settings: Settings = Field(default_factory=Settings)
    """Compiler settings."""

    def with_sources(self, sources: Dict[str, SourceIn]) -> "Input":
        """Return a copy of this input whose ``sources`` is replaced by ``sources``."""
        return self.model_copy(update={"sources": sources})
