"""Thread-safe compiler session around one compiler engine."""

from __future__ import annotations

import threading
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from solc_bridge.artifacts import ArtifactStore
from solc_bridge.data import ImportCallback, Input, Output, from_json, to_json
from solc_bridge.engine import CompilerEngine, EngineMetadata, V8Engine
from solc_bridge.errors import (
    ClosedSessionError,
    EngineCallError,
    InvalidInputError,
    SolcError,
)
from solc_bridge.logging import get_logger
from solc_bridge.resolver import DEFAULT_MAX_DEPTH, ImportResolver

logger = get_logger("Solc")


class Solc:
    """A Solidity compiler instance.

    Every operation (``license``, ``version``, ``compile``, ``close``) holds one lock for
    its full duration, including import resolution, so the engine never sees two calls at
    once. The import callback runs while the lock is held: it must not call back into the
    same session, and slow callbacks stall every other caller of the session.

    A session is open after construction and closed, for good, by the first
    :meth:`close`. It can also be used as a context manager.

    Examples
    --------
    >>> with new_with_version("0.8.21") as solc:
    ...     output = solc.compile(
    ...         Input(sources={"A.sol": SourceIn(content='import "B.sol"; contract A {}')}),
    ...         import_callback=lambda path: ImportResult.ok(read_file(path)),
    ...     )
    """

    def __init__(self, engine: CompilerEngine, max_import_depth: int = DEFAULT_MAX_DEPTH) -> None:
        """Wrap an already loaded engine. The session takes ownership of ``engine``.

        Parameters
        ----------
        engine : CompilerEngine
            The loaded compiler.
        max_import_depth : int
            Maximum import chain length accepted during import resolution.
        """
        self._engine: Optional[CompilerEngine] = engine
        self._metadata = engine.metadata
        self._max_import_depth = max_import_depth
        self._lock = threading.Lock()
        self._closed = False

    @classmethod
    def from_soljson(cls, soljson: str, **kwargs: Any) -> "Solc":
        """Create a session from emscripten compiler source.

        Raises
        ------
        EngineInitError
            If the source fails to load.
        BindingError
            If a required entry point is missing.
        """
        return cls(V8Engine(soljson), **kwargs)

    @classmethod
    def from_version(
        cls, version: str, store: Optional[ArtifactStore] = None, **kwargs: Any
    ) -> "Solc":
        """Create a session for a release version.

        The artifact is taken from the bundled table, the disk cache or the remote catalog,
        in that order.

        Raises
        ------
        ArtifactError
            If the artifact cannot be obtained.
        EngineInitError
            If the artifact fails to load.
        BindingError
            If a required entry point is missing.
        """
        artifact = (store or ArtifactStore()).resolve_artifact(version)
        logger.debug(f"Loading compiler {version} ({artifact.origin})")
        return cls(V8Engine(artifact.source, filename=f"soljson-{version}.js"), **kwargs)

    @property
    def metadata(self) -> EngineMetadata:
        """The entry points bound by the engine."""
        return self._metadata

    @property
    def closed(self) -> bool:
        return self._closed

    def license(self) -> str:
        """Get the compiler license text.

        Returns an empty string if the compiler exports no license entry point, if the
        session is closed or if the call fails. Never raises.
        """
        with self._lock:
            if self._closed:
                return ""
            try:
                return self._engine.query_license()
            except SolcError as e:
                logger.debug(f"license query failed: {e}")
                return ""

    def version(self) -> str:
        """Get the compiler version string, e.g. '0.8.21+commit.d9974bed.Emscripten.clang'.

        Returns an empty string if the session is closed or if the call fails. Never raises.
        """
        with self._lock:
            if self._closed:
                return ""
            try:
                return self._engine.query_version()
            except SolcError as e:
                logger.debug(f"version query failed: {e}")
                return ""

    def compile(
        self,
        input: Union[Input, Dict[str, Any]],
        import_callback: Optional[ImportCallback] = None,
    ) -> Output:
        """Compile sources.

        Diagnostics reported by the compiler, including ones with severity 'error', are
        returned in ``Output.errors`` and are not raised.

        Parameters
        ----------
        input : Union[Input, Dict[str, Any]]
            The compile request, as a model or as a standard JSON dict.
        import_callback : Optional[ImportCallback]
            If given, imports missing from ``input.sources`` are requested from it before
            the compiler runs.

        Returns
        -------
        Output
            The parsed compiler response.

        Raises
        ------
        InvalidInputError
            If ``input`` is None or malformed.
        ClosedSessionError
            If the session has been closed.
        ImportResolutionFailedError
            If an import could not be resolved. The compiler is not invoked.
        MarshalError
            If the input cannot be encoded.
        EngineCallError
            If the engine call fails.
        UnmarshalError
            If the compiler response cannot be decoded.
        """
        input = self._validate_input(input)

        with self._lock:
            if self._closed:
                raise ClosedSessionError()

            if import_callback is not None:
                resolver = ImportResolver(import_callback, max_depth=self._max_import_depth)
                input = resolver.resolve_imports(input)

            input_json = to_json(input)
            try:
                output_json = self._engine.invoke_compile(input_json)
            except EngineCallError as e:
                raise EngineCallError(f"compilation failed: {e}") from e
            return from_json(output_json, Output)

    def close(self) -> None:
        """Release the engine. Only the first call has an effect."""
        with self._lock:
            if self._closed:
                return
            engine, self._engine = self._engine, None
            self._closed = True
            logger.debug("Closing compiler session")
            engine.dispose()

    def __enter__(self) -> "Solc":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @staticmethod
    def _validate_input(input: Union[Input, Dict[str, Any], None]) -> Input:
        if input is None:
            raise InvalidInputError("input cannot be None")
        if isinstance(input, Input):
            return input
        if isinstance(input, dict):
            try:
                return Input.model_validate(input)
            except ValidationError as e:
                raise InvalidInputError(f"malformed compile input: {e}") from e
        raise InvalidInputError(f"input must be an Input or a dict, got {type(input).__name__}")


def new(soljson: str, **kwargs: Any) -> Solc:
    """Create a compiler session from emscripten compiler source (soljson.js)."""
    return Solc.from_soljson(soljson, **kwargs)


def new_with_version(version: str, store: Optional[ArtifactStore] = None, **kwargs: Any) -> Solc:
    """Create a compiler session for a release version, e.g. '0.8.21'."""
    return Solc.from_version(version, store=store, **kwargs)
