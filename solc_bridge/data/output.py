"""Strong-typed definitions of the compiler standard JSON output."""

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from .utils import CamelModel


class _OpenModel(CamelModel):
    """Output model that keeps fields it does not declare."""

    model_config = ConfigDict(extra="allow")


class SourceLocation(_OpenModel):
    file: str = ""
    start: int = -1
    end: int = -1


class CompileError(_OpenModel):
    """A diagnostic reported by the compiler.

    These are data, not exceptions. A diagnostic with ``severity == "error"`` means the
    sources did not compile; warnings and infos do not prevent output.
    """

    type: str = ""
    """Diagnostic category, e.g. 'ParserError', 'TypeError', 'Warning'."""
    component: str = ""
    """Compiler component that produced the diagnostic, e.g. 'general'."""
    severity: str = ""
    """One of 'error', 'warning', 'info'."""
    error_code: Optional[str] = None
    """Numeric error code, when the compiler provides one."""
    message: str = ""
    """Short description."""
    formatted_message: str = ""
    """Description with source location and excerpt."""
    source_location: Optional[SourceLocation] = None
    """Location in the source that triggered the diagnostic."""


class LinkReference(_OpenModel):
    start: int
    length: int


class Bytecode(_OpenModel):
    """Creation or runtime bytecode of a contract."""

    object: str = ""
    """Hex-encoded bytecode, possibly containing unlinked library placeholders."""
    opcodes: Optional[str] = None
    """Opcode listing."""
    source_map: Optional[str] = None
    """Compressed source mapping."""
    link_references: Dict[str, Dict[str, List[LinkReference]]] = Field(default_factory=dict)
    """Placeholder positions keyed by source file, then library name."""


class EVM(_OpenModel):
    """EVM related outputs of a contract."""

    assembly: Optional[str] = None
    bytecode: Bytecode = Field(default_factory=Bytecode)
    deployed_bytecode: Bytecode = Field(default_factory=Bytecode)
    method_identifiers: Dict[str, str] = Field(default_factory=dict)
    """Mapping from function signature to 4-byte selector (hex, no prefix)."""
    gas_estimates: Optional[Dict[str, Any]] = None


class Contract(_OpenModel):
    """Compilation output for one contract."""

    abi: List[Dict[str, Any]] = Field(default_factory=list)
    metadata: Optional[str] = None
    userdoc: Optional[Dict[str, Any]] = None
    devdoc: Optional[Dict[str, Any]] = None
    ir: Optional[str] = None
    ir_optimized: Optional[str] = None
    storage_layout: Optional[Dict[str, Any]] = None
    evm: EVM = Field(default_factory=EVM)


class SourceOut(_OpenModel):
    """Per-source output: source unit id and, if selected, the AST."""

    id: int = 0
    ast: Optional[Dict[str, Any]] = None
    legacy_ast: Optional[Dict[str, Any]] = Field(default=None, alias="legacyAST")


class Output(_OpenModel):
    """A compile response in the compiler's standard JSON format.

    Produced fresh for every compile call. ``errors`` and ``contracts`` may both be
    populated when compilation succeeded with warnings.
    """

    errors: List[CompileError] = Field(default_factory=list)
    """Diagnostics reported by the compiler."""
    sources: Dict[str, SourceOut] = Field(default_factory=dict)
    """Per-source outputs keyed by logical path."""
    contracts: Dict[str, Dict[str, Contract]] = Field(default_factory=dict)
    """Contracts keyed by logical path, then contract name."""

    @property
    def has_errors(self) -> bool:
        """Whether any diagnostic has severity 'error'."""
        return any(e.severity == "error" for e in self.errors)

    def contract(self, path: str, name: str) -> Optional[Contract]:
        """Look up the output of contract ``name`` defined in ``path``."""
        return self.contracts.get(path, {}).get(name)
