import sys
from collections import Counter
from typing import Dict

import pytest

from solc_bridge.data import ImportResult, Input, SourceIn
from solc_bridge.errors import ImportResolutionFailedError, MaxDepthExceededError
from solc_bridge.resolver import (
    DEFAULT_MAX_DEPTH,
    ImportResolver,
    extract_imports,
    resolve_import_path,
)


class FileCallback:
    """Serves files from a dict and counts how often each path is requested."""

    def __init__(self, files: Dict[str, str]) -> None:
        self.files = files
        self.calls: Counter = Counter()

    def __call__(self, path: str) -> ImportResult:
        self.calls[path] += 1
        if path in self.files:
            return ImportResult.ok(self.files[path])
        return ImportResult.fail(f"File not found: {path}")


def _input(**sources: str) -> Input:
    return Input(sources={name: SourceIn(content=text) for name, text in sources.items()})


def _input_of(sources: Dict[str, str]) -> Input:
    return Input(sources={name: SourceIn(content=text) for name, text in sources.items()})


def test_extract_imports_all_forms():
    source = """
    pragma solidity ^0.8.0;
    import "./A.sol";
    import './B.sol';
    import "C.sol" as C;
    import {X, Y as Z} from "../D.sol";
    import * as E from "@scope/pkg/E.sol";
    import F from "F.sol";
    contract Main {}
    """
    assert extract_imports(source) == [
        "./A.sol",
        "./B.sol",
        "C.sol",
        "../D.sol",
        "@scope/pkg/E.sol",
        "F.sol",
    ]
    assert extract_imports("contract NoImports {}") == []


def test_resolve_import_path():
    assert resolve_import_path("./lib/Math.sol", "Calculator.sol") == "lib/Math.sol"
    assert resolve_import_path("./Math.sol", "contracts/lib/X.sol") == "contracts/lib/Math.sol"
    assert resolve_import_path("../Base.sol", "contracts/tokens/T.sol") == "contracts/Base.sol"
    assert resolve_import_path("./a/../b/./C.sol", "x/Y.sol") == "x/b/C.sol"
    assert resolve_import_path("lib/Math.sol", "contracts/Calc.sol") == "lib/Math.sol"
    assert resolve_import_path("@oz/token/ERC20.sol", "a/b/c.sol") == "@oz/token/ERC20.sol"


def test_single_import_scenario():
    callback = FileCallback({"B.sol": "contract B {}"})
    inp = _input(**{"A.sol": 'import "B.sol"; contract A {}'})

    resolved = ImportResolver(callback).resolve_imports(inp)

    assert set(resolved.sources) == {"A.sol", "B.sol"}
    assert resolved.sources["B.sol"].content == "contract B {}"
    assert callback.calls == Counter({"B.sol": 1})
    # The caller's input is left untouched
    assert set(inp.sources) == {"A.sol"}


def test_acyclic_graph_transitively_complete():
    files = {
        "lib/Math.sol": 'import "./Util.sol"; library Math {}',
        "lib/Util.sol": 'import "@pkg/Base.sol"; library Util {}',
        "lib/String.sol": 'import "./Util.sol"; library String {}',
        "@pkg/Base.sol": "contract Base {}",
    }
    callback = FileCallback(files)
    inp = _input(
        **{
            "Calculator.sol": 'import "./lib/Math.sol";\nimport "./lib/String.sol";\n'
            "contract Calculator {}"
        }
    )

    resolved = ImportResolver(callback).resolve_imports(inp)

    assert set(resolved.sources) == {"Calculator.sol", *files}
    # Shared dependencies are fetched once
    assert all(count == 1 for count in callback.calls.values())
    assert set(callback.calls) == set(files)


def test_cycle_terminates_with_one_request_per_path():
    callback = FileCallback(
        {
            "B.sol": 'import "C.sol"; contract B {}',
            "C.sol": 'import "A.sol"; import "B.sol"; contract C {}',
        }
    )
    inp = _input(**{"A.sol": 'import "B.sol"; contract A {}'})

    resolved = ImportResolver(callback).resolve_imports(inp)

    assert set(resolved.sources) == {"A.sol", "B.sol", "C.sol"}
    assert callback.calls == Counter({"B.sol": 1, "C.sol": 1})


def test_self_import():
    callback = FileCallback({})
    resolved = ImportResolver(callback).resolve_imports(_input(**{"A.sol": 'import "A.sol";'}))
    assert set(resolved.sources) == {"A.sol"}
    assert not callback.calls


def test_imports_between_supplied_sources_need_no_callback():
    callback = FileCallback({"C.sol": "contract C {}"})
    inp = _input(
        **{
            "A.sol": 'import "./B.sol"; contract A {}',
            "B.sol": 'import "./C.sol"; contract B {}',
        }
    )
    resolved = ImportResolver(callback).resolve_imports(inp)
    assert set(resolved.sources) == {"A.sol", "B.sol", "C.sol"}
    assert callback.calls == Counter({"C.sol": 1})


def test_existing_sources_never_overwritten():
    callback = FileCallback({"B.sol": "contract Replaced {}"})
    inp = _input(**{"A.sol": 'import "B.sol";', "B.sol": "contract Original {}"})
    resolved = ImportResolver(callback).resolve_imports(inp)
    assert resolved.sources["B.sol"].content == "contract Original {}"
    assert not callback.calls


def test_relative_imports_resolve_against_importing_file():
    callback = FileCallback(
        {
            "contracts/lib/Math.sol": 'import "../Base.sol"; library Math {}',
            "contracts/Base.sol": "contract Base {}",
        }
    )
    inp = _input(**{"contracts/Calc.sol": 'import "./lib/Math.sol"; contract Calc {}'})
    resolved = ImportResolver(callback).resolve_imports(inp)
    assert set(resolved.sources) == {
        "contracts/Calc.sol",
        "contracts/lib/Math.sol",
        "contracts/Base.sol",
    }


def test_callback_error_aborts():
    callback = FileCallback({})
    inp = _input(**{"A.sol": 'import "B.sol"; import "C.sol";'})
    with pytest.raises(ImportResolutionFailedError) as exc_info:
        ImportResolver(callback).resolve_imports(inp)
    assert exc_info.value.path == "B.sol"
    assert exc_info.value.message == "File not found: B.sol"
    # Resolution stops at the first failure
    assert callback.calls == Counter({"B.sol": 1})


def test_callback_exception_is_wrapped():
    def callback(path: str) -> ImportResult:
        raise OSError("disk on fire")

    with pytest.raises(ImportResolutionFailedError) as exc_info:
        ImportResolver(callback).resolve_imports(_input(**{"A.sol": 'import "B.sol";'}))
    assert exc_info.value.path == "B.sol"
    assert "disk on fire" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, OSError)


def test_callback_may_return_plain_dict():
    resolver = ImportResolver(lambda path: {"contents": "contract B {}"})
    resolved = resolver.resolve_imports(_input(**{"A.sol": 'import "B.sol";'}))
    assert resolved.sources["B.sol"].content == "contract B {}"

    resolver = ImportResolver(lambda path: {"nothing": True})
    with pytest.raises(ImportResolutionFailedError):
        resolver.resolve_imports(_input(**{"A.sol": 'import "B.sol";'}))


def test_empty_error_string_is_success():
    resolver = ImportResolver(lambda path: {"contents": "contract B {}", "error": ""})
    resolved = resolver.resolve_imports(_input(**{"A.sol": 'import "B.sol";'}))
    assert resolved.sources["B.sol"].content == "contract B {}"

    resolver = ImportResolver(lambda path: ImportResult.fail(""))
    resolved = resolver.resolve_imports(_input(**{"A.sol": 'import "B.sol";'}))
    assert resolved.sources["B.sol"].content == ""


def test_depth_limit():
    # c0 -> c1 -> ... -> c10, only c0 supplied
    files = {f"c{i}.sol": f'import "c{i + 1}.sol";' for i in range(1, 11)}
    callback = FileCallback(files)
    inp = _input(**{"c0.sol": 'import "c1.sol";'})

    with pytest.raises(MaxDepthExceededError) as exc_info:
        ImportResolver(callback, max_depth=3).resolve_imports(inp)

    assert exc_info.value.path == "c4.sol"
    assert exc_info.value.max_depth == 3
    assert isinstance(exc_info.value, ImportResolutionFailedError)
    assert set(callback.calls) == {"c1.sol", "c2.sol", "c3.sol"}


def test_depth_limit_on_supplied_sources():
    sources = {f"s{i}.sol": f'import "s{i + 1}.sol";' for i in range(5)}
    sources["s5.sol"] = "contract Leaf {}"
    callback = FileCallback({})
    with pytest.raises(MaxDepthExceededError) as exc_info:
        ImportResolver(callback, max_depth=2).resolve_imports(_input_of(sources))
    assert exc_info.value.path == "s3.sol"
    assert not callback.calls


def test_chain_at_default_limit_succeeds():
    n = DEFAULT_MAX_DEPTH
    files = {f"f{i}.sol": f'import "f{i + 1}.sol";' for i in range(1, n)}
    files[f"f{n}.sol"] = "contract Last {}"
    callback = FileCallback(files)
    resolved = ImportResolver(callback).resolve_imports(_input(**{"f0.sol": 'import "f1.sol";'}))
    assert len(resolved.sources) == n + 1


def test_resolver_is_reusable():
    callback = FileCallback({"B.sol": "contract B {}"})
    resolver = ImportResolver(callback)
    inp = _input(**{"A.sol": 'import "B.sol";'})
    resolver.resolve_imports(inp)
    resolver.resolve_imports(inp)
    # Visited state does not leak between runs
    assert callback.calls == Counter({"B.sol": 2})


def test_negative_max_depth_rejected():
    with pytest.raises(ValueError):
        ImportResolver(FileCallback({}), max_depth=-1)


if __name__ == "__main__":
    pytest.main(sys.argv)
