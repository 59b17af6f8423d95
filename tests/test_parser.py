from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

import pytest

from sourcegauge.engine.parser import ParseError, iter_nodes, parse_strict, parse_tolerant


def test_parse_strict_accepts_valid_code() -> None:
    tree = parse_strict("const add = (a, b) => a + b;\n")
    assert tree.root_node.type == "program"
    assert not tree.root_node.has_error


def test_parse_strict_rejects_unbalanced_brace() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_strict("function f() {\n  return 1;\n")
    assert excinfo.value.message == 'Missing "}" at line 2, column 12'
    assert str(excinfo.value) == excinfo.value.message


def test_parse_strict_points_at_the_unexpected_token() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_strict("if (x {\n")
    assert excinfo.value.message == "Unexpected token { at line 1, column 7"


@pytest.mark.parametrize(
    "code",
    [
        "return 1;\n",
        "break;\n",
        "await x;\n",
        "const a = <div/>;\n",
        "function () {}\n",
        "let let = 1;\n",
        "class A { constructor() {} constructor() {} }\n",
        "export const a = 1;\n",
    ],
)
def test_parse_strict_rejects_code_that_is_not_a_valid_script(code: str) -> None:
    with pytest.raises(ParseError):
        parse_strict(code)


def test_parse_strict_reports_early_errors_by_name() -> None:
    with pytest.raises(ParseError, match=r"^Illegal return statement at line 1"):
        parse_strict("return 1;\n")


def test_parse_strict_returns_tree_sitter_tree() -> None:
    tree = parse_strict("async function f() { await g(); }\n")
    assert any(node.type == "await_expression" for node in iter_nodes(tree.root_node))


def test_parse_strict_maps_deep_recursion_to_parse_error(monkeypatch) -> None:
    import sourcegauge.engine.parser as ps

    def _overflow(_code: str) -> None:
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(ps.esprima, "parseScript", _overflow)
    with pytest.raises(ParseError, match="nested too deeply"):
        parse_strict("x;")


def test_parse_tolerant_recovers_from_errors() -> None:
    tree = parse_tolerant("function f() {\n  if (x) { y(); \n")
    assert tree.root_node.has_error
    assert any(node.type == "if_statement" for node in iter_nodes(tree.root_node))


def test_parse_tolerant_wraps_parser_failures(monkeypatch) -> None:
    import sourcegauge.engine.parser as ps

    class BrokenParser:
        def parse(self, _source: bytes) -> object:
            raise ValueError("boom")

    monkeypatch.setattr(ps, "_get_parser", lambda: BrokenParser())
    with pytest.raises(ParseError, match="boom"):
        parse_tolerant("x;")


def test_parse_tolerant_rejects_missing_tree(monkeypatch) -> None:
    import sourcegauge.engine.parser as ps

    class NullParser:
        def parse(self, _source: bytes) -> None:
            return None

    monkeypatch.setattr(ps, "_get_parser", lambda: NullParser())
    with pytest.raises(ParseError):
        parse_tolerant("x;")


def test_parser_is_thread_local(monkeypatch) -> None:
    import sourcegauge.engine.parser as ps

    class DummyParser:
        def __init__(self, language: object) -> None:
            self.language = language

        def parse(self, _source: bytes) -> int:
            return id(self)

    monkeypatch.setattr(ps, "Parser", DummyParser)
    monkeypatch.setattr(ps, "_get_language", lambda: object())
    monkeypatch.setattr(ps, "_PARSER_LOCAL", threading.local())

    # Same thread should reuse the same Parser instance.
    assert ps.parse_tolerant("x = 1") == ps.parse_tolerant("x = 2")

    barrier = threading.Barrier(2)

    def worker() -> int:
        barrier.wait()
        return int(ps.parse_tolerant("x = 1"))  # type: ignore[call-overload]

    with ThreadPoolExecutor(max_workers=2) as executor:
        a, b = list(executor.map(lambda _: worker(), range(2)))

    assert a != b


@dataclass
class FakeNode:
    type: str
    children: list[FakeNode] = field(default_factory=list)


def test_iter_nodes_visits_each_node_once_in_pre_order() -> None:
    tree = FakeNode("a", [FakeNode("b", [FakeNode("c")]), FakeNode("d")])
    assert [n.type for n in iter_nodes(tree)] == ["a", "b", "c", "d"]  # type: ignore[arg-type]


def test_iter_nodes_handles_deep_nesting() -> None:
    root = FakeNode("root")
    node = root
    for _ in range(20_000):
        child = FakeNode("block")
        node.children.append(child)
        node = child
    assert sum(1 for _ in iter_nodes(root)) == 20_001  # type: ignore[arg-type]
