"""Compiler engine backed by an embedded V8 isolate (mini-racer)."""

from __future__ import annotations

import time
from typing import Optional, Sequence

from py_mini_racer import MiniRacer

from solc_bridge.env import get_solc_debug
from solc_bridge.errors import BindingError, EngineCallError, EngineInitError
from solc_bridge.logging import configure_logging, get_logger

from .base import CompilerEngine, EngineMetadata

logger = get_logger("V8Engine")

# Entry point names, newest naming convention first
VERSION_SYMBOLS = ("solidity_version", "version")
LICENSE_SYMBOLS = ("solidity_license", "license")
COMPILE_SYMBOLS = ("solidity_compile", "compileStandard")

_PRELUDE = """
globalThis.console = globalThis.console || {
  log: function () {}, info: function () {}, warn: function () {}, error: function () {}
};
"""

_PROBE = """
globalThis.__solc_bridge_probe = function (candidates) {
  if (typeof Module === 'undefined' || typeof Module.cwrap !== 'function') {
    return null;
  }
  for (var i = 0; i < candidates.length; i++) {
    if (typeof Module['_' + candidates[i]] === 'function') {
      return candidates[i];
    }
  }
  return '';
};
"""

_BIND = """
globalThis.__solc_bridge = {
  version: Module.cwrap('%(version)s', 'string', []),
  license: %(license)s,
  compile: Module.cwrap('%(compile)s', 'string', ['string'])
};
"""


class V8Engine(CompilerEngine):
    """Loads an emscripten compiler build (soljson.js) into a private V8 isolate.

    The script is executed once, then the version, license and compile exports are
    wrapped with ``Module.cwrap`` into globals that are called for every request.

    Examples
    --------
    >>> engine = V8Engine(soljson_source)
    >>> engine.query_version()
    '0.8.21+commit.d9974bed.Emscripten.clang'
    >>> engine.dispose()
    """

    def __init__(self, soljson: str, filename: str = "soljson.js") -> None:
        """Load the compiler and bind its entry points.

        Parameters
        ----------
        soljson : str
            The emscripten compiler script.
        filename : str
            Name used in log and error messages.

        Raises
        ------
        EngineInitError
            If the script is empty or fails to execute.
        BindingError
            If ``Module.cwrap`` or a required entry point is missing.
        """
        if not soljson:
            raise EngineInitError("soljson source cannot be empty")
        self._filename = filename
        self._trace = get_solc_debug()
        if self._trace:
            configure_logging("DEBUG")
        try:
            self._ctx: Optional[MiniRacer] = MiniRacer()
        except Exception as e:
            raise EngineInitError(f"failed to create V8 context: {e}") from e

        try:
            self._load(soljson)
            self.metadata = self._bind()
        except BaseException:
            self.dispose()
            raise

    def _run(self, script: str) -> None:
        # Evaluate for side effects only; the completion value is discarded
        self._ctx.eval(script + "\n;undefined;")

    def _load(self, soljson: str) -> None:
        start = time.monotonic()
        try:
            self._run(_PRELUDE)
            self._run(soljson)
            self._run(_PROBE)
        except Exception as e:
            raise EngineInitError(f"failed to execute {self._filename}: {e}") from e
        logger.debug(f"Loaded {self._filename} in {time.monotonic() - start:.2f}s")

    def _probe(self, candidates: Sequence[str]) -> Optional[str]:
        try:
            found = self._ctx.call("__solc_bridge_probe", list(candidates))
        except Exception as e:
            raise BindingError(f"failed to probe entry points {list(candidates)}: {e}") from e
        if found is None:
            raise BindingError(f"{self._filename} does not define Module.cwrap", symbol="cwrap")
        return found or None

    def _bind(self) -> EngineMetadata:
        version_symbol = self._probe(VERSION_SYMBOLS)
        if version_symbol is None:
            raise BindingError(
                f"no version entry point found, tried {list(VERSION_SYMBOLS)}",
                symbol=VERSION_SYMBOLS[0],
            )
        compile_symbol = self._probe(COMPILE_SYMBOLS)
        if compile_symbol is None:
            raise BindingError(
                f"no compile entry point found, tried {list(COMPILE_SYMBOLS)}",
                symbol=COMPILE_SYMBOLS[0],
            )
        license_symbol = self._probe(LICENSE_SYMBOLS)

        license_expr = "null"
        if license_symbol is not None:
            license_expr = f"Module.cwrap('{license_symbol}', 'string', [])"
        try:
            self._run(
                _BIND
                % {"version": version_symbol, "license": license_expr, "compile": compile_symbol}
            )
            bound = self._ctx.eval("typeof __solc_bridge.compile === 'function'")
        except Exception as e:
            raise BindingError(f"failed to bind compiler functions: {e}") from e
        if not bound:
            raise BindingError("compile binding is not a function", symbol=compile_symbol)

        return EngineMetadata(
            engine="v8",
            version_symbol=version_symbol,
            license_symbol=license_symbol,
            compile_symbol=compile_symbol,
        )

    def _call(self, name: str, *args: str) -> str:
        if self._ctx is None:
            raise EngineCallError(f"cannot call {name}: engine has been disposed")
        if self._trace:
            logger.info(f"bridge call {name} ({sum(len(a) for a in args)} bytes in)")
        try:
            result = self._ctx.call(f"__solc_bridge.{name}", *args)
        except Exception as e:
            raise EngineCallError(f"engine call {name} failed: {e}") from e
        if self._trace:
            logger.info(f"bridge return {name} ({len(result or '')} bytes out)")
        return result if result is not None else ""

    def query_version(self) -> str:
        return self._call("version")

    def query_license(self) -> str:
        if self.metadata.license_symbol is None:
            return ""
        return self._call("license")

    def invoke_compile(self, input_json: str) -> str:
        return self._call("compile", input_json)

    def _release(self) -> None:
        ctx, self._ctx = self._ctx, None
        if ctx is None:
            return
        close = getattr(ctx, "close", None)
        if close is not None:
            close()
