"""Abstract interface of a loaded compiler engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class EngineMetadata(BaseModel):
    """Which compiler entry points an engine bound."""

    engine: str
    """The engine implementation, e.g. 'v8'."""
    version_symbol: str
    """Exported name bound for the version query."""
    license_symbol: Optional[str] = None
    """Exported name bound for the license query, None if the artifact has none."""
    compile_symbol: str
    """Exported name bound for standard JSON compilation."""


class CompilerEngine(ABC):
    """One compiler artifact loaded into one isolated execution context.

    The engine is single-threaded and stateful: callers must never run two calls on the
    same instance at the same time. :class:`solc_bridge.session.Solc` serializes access.

    Subclasses implement the three query methods and :meth:`_release`; :meth:`dispose` is
    idempotent.
    """

    metadata: EngineMetadata
    """The entry points bound at construction."""

    _disposed: bool = False

    @abstractmethod
    def query_version(self) -> str:
        """Call the compiler's version entry point."""
        ...

    @abstractmethod
    def query_license(self) -> str:
        """Call the compiler's license entry point.

        Returns
        -------
        str
            The license text, or an empty string if the artifact exports no license
            entry point.
        """
        ...

    @abstractmethod
    def invoke_compile(self, input_json: str) -> str:
        """Run one standard JSON compilation.

        Parameters
        ----------
        input_json : str
            The compile request.

        Returns
        -------
        str
            The compile response, unparsed.
        """
        ...

    @abstractmethod
    def _release(self) -> None:
        """Release the execution context and runtime. Called at most once."""
        ...

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Release engine resources. Safe to call multiple times."""
        if self._disposed:
            return
        try:
            self._release()
        finally:
            self._disposed = True
