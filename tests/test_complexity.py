from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from helpers import IF_FUNCTION

from sourcegauge.engine.complexity import DECISION_NODE_TYPES, count_decision_points, cyclomatic_complexity
from sourcegauge.engine.parser import parse_tolerant


def _cc(code: str) -> int:
    return cyclomatic_complexity(parse_tolerant(code)).cyclomatic_complexity


def test_straight_line_code_has_base_complexity() -> None:
    assert _cc("const a = 1;\nconsole.log(a);\n") == 1


def test_single_if_adds_one() -> None:
    assert _cc(IF_FUNCTION) == 2


@pytest.mark.parametrize(
    "code",
    [
        "if (a) { b(); }",
        "for (let i = 0; i < n; i++) { b(); }",
        "while (a) { b(); }",
        "do { b(); } while (a);",
        "switch (a) { case 1: b(); break; default: c(); }",
        "try { a(); } catch (e) { b(); }",
        "const v = a ? 1 : 2;",
        "for (const k in obj) { b(k); }",
        "for (const v of items) { b(v); }",
    ],
)
def test_each_decision_construct_counts_once(code: str) -> None:
    assert _cc(code) == 2


def test_else_if_chain_counts_each_branch() -> None:
    code = "if (a) { x(); } else if (b) { y(); } else { z(); }"
    assert _cc(code) == 3


def test_nested_constructs_accumulate() -> None:
    code = """
function process(items) {
  for (const item of items) {
    try {
      if (item.ok) {
        handle(item.ready ? item : null);
      }
    } catch (err) {
      report(err);
    }
  }
}
"""
    assert _cc(code) == 5


def test_logical_operators_and_finally_do_not_count() -> None:
    assert _cc("try { a(); } finally { b(); }\nconst c = d && e || f;") == 1


@dataclass
class FakeNode:
    type: str
    children: list[FakeNode] = field(default_factory=list)


@dataclass
class FakeTree:
    root_node: FakeNode


def test_walker_treats_nodes_structurally() -> None:
    tree = FakeTree(
        FakeNode(
            "program",
            [
                FakeNode("if_statement", [FakeNode("ternary_expression")]),
                FakeNode("expression_statement"),
                FakeNode("while_statement", [FakeNode("catch_clause")]),
            ],
        )
    )
    assert count_decision_points(tree.root_node) == 4  # type: ignore[arg-type]
    assert cyclomatic_complexity(tree).cyclomatic_complexity == 5  # type: ignore[arg-type]


def test_decision_node_types_cover_each_construct() -> None:
    assert DECISION_NODE_TYPES == {
        "if_statement",
        "for_statement",
        "while_statement",
        "do_statement",
        "switch_statement",
        "catch_clause",
        "ternary_expression",
        "for_in_statement",
    }
