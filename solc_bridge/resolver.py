"""Up-front resolution of import statements through a caller-supplied callback."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass, field
from typing import Dict, List, Set

from pydantic import ValidationError

from solc_bridge.data import ImportCallback, ImportResult, Input, SourceIn
from solc_bridge.errors import ImportResolutionFailedError, MaxDepthExceededError
from solc_bridge.logging import get_logger

logger = get_logger("ImportResolver")

DEFAULT_MAX_DEPTH = 50
"""Maximum distance from an original source file to a transitively imported one."""

IMPORT_PATTERN = re.compile(
    r"""import\s+(?:(?:\{[^}]*\}|\*\s+as\s+\w+|\w+)\s+from\s+)?["']([^"']+)["']"""
)
"""Matches ``import "p";``, ``import "p" as x;``, ``import {a, b as c} from "p";``,
``import * as x from "p";`` and ``import x from "p";``, capturing the path literal."""


def extract_imports(source: str) -> List[str]:
    """Collect the path literals of all import statements in ``source``, in source order."""
    return IMPORT_PATTERN.findall(source)


def resolve_import_path(import_path: str, current_file: str) -> str:
    """Compute the logical path of an import found in ``current_file``.

    Paths starting with ``.`` are resolved against the directory of ``current_file`` and
    normalized; any other path is a package-style identifier and is returned verbatim.

    Examples
    --------
    >>> resolve_import_path("./lib/Math.sol", "contracts/Calc.sol")
    'contracts/lib/Math.sol'
    >>> resolve_import_path("../Base.sol", "contracts/tokens/Token.sol")
    'contracts/Base.sol'
    >>> resolve_import_path("@openzeppelin/contracts/token/ERC20/ERC20.sol", "A.sol")
    '@openzeppelin/contracts/token/ERC20/ERC20.sol'
    """
    if not import_path.startswith("."):
        return import_path
    current_dir = posixpath.dirname(current_file)
    return posixpath.normpath(posixpath.join(current_dir, import_path))


@dataclass
class _ResolutionState:
    """Bookkeeping for one resolve_imports run."""

    sources: Dict[str, SourceIn]
    visited: Set[str] = field(default_factory=set)
    context_stack: List[str] = field(default_factory=list)


class ImportResolver:
    """Makes the sources of a compile input transitively complete.

    Every file in the input is scanned for import statements. Imports already present in
    the sources are scanned in turn; missing ones are requested from the callback, added
    to the sources and scanned. Each logical path is scanned at most once per run, which
    also terminates import cycles, and the callback is asked at most once per path.

    The first content seen for a path wins: a path is marked visited before its own
    imports are resolved and is never re-fetched within the run.
    """

    def __init__(self, callback: ImportCallback, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        """Initialize the resolver.

        Parameters
        ----------
        callback : ImportCallback
            Function mapping a logical path to an :class:`ImportResult`.
        max_depth : int
            Maximum import chain length below an original source file.
        """
        if max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        self._callback = callback
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def resolve_imports(self, input: Input) -> Input:
        """Resolve all imports reachable from the sources of ``input``.

        Parameters
        ----------
        input : Input
            The compile input. It is not modified.

        Returns
        -------
        Input
            A copy of ``input`` whose sources contain every transitively imported file.
            Entries of the original sources are never replaced.

        Raises
        ------
        ImportResolutionFailedError
            If the callback reports an error (or raises) for some path.
        MaxDepthExceededError
            If an import chain is longer than ``max_depth``.
        """
        state = _ResolutionState(sources=dict(input.sources))
        for file_name in list(state.sources):
            self._resolve_file_imports(state, file_name, 0)
        return input.with_sources(state.sources)

    def _resolve_file_imports(self, state: _ResolutionState, file_name: str, depth: int) -> None:
        if depth > self._max_depth:
            raise MaxDepthExceededError(file_name, self._max_depth)
        if file_name in state.visited:
            return

        source = state.sources.get(file_name)
        if source is None:
            raise ImportResolutionFailedError(file_name, "source file not found")

        state.visited.add(file_name)
        state.context_stack.append(file_name)
        try:
            for import_path in extract_imports(source.content):
                resolved = resolve_import_path(import_path, state.context_stack[-1])
                if resolved not in state.sources:
                    if depth + 1 > self._max_depth:
                        raise MaxDepthExceededError(resolved, self._max_depth)
                    state.sources[resolved] = SourceIn(content=self._fetch(resolved))
                self._resolve_file_imports(state, resolved, depth + 1)
        finally:
            state.context_stack.pop()

    def _fetch(self, path: str) -> str:
        logger.debug(f"Requesting import '{path}' from callback")
        try:
            result = self._callback(path)
            if not isinstance(result, ImportResult):
                result = ImportResult.model_validate(result)
        except ImportResolutionFailedError:
            raise
        except ValidationError as e:
            raise ImportResolutionFailedError(path, f"invalid callback result: {e}") from e
        except Exception as e:
            raise ImportResolutionFailedError(path, f"callback raised {type(e).__name__}: {e}") from e

        if result.error is not None:
            raise ImportResolutionFailedError(path, result.error)
        return result.contents
