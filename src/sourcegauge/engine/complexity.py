from __future__ import annotations

from sourcegauge.engine.parser import SyntaxNode, SyntaxTree, iter_nodes
from sourcegauge.engine.types import ComplexityReport

BASE_COMPLEXITY = 1

# tree-sitter-javascript node kinds that open an extra execution path.
# `for_in_statement` covers both `for (k in obj)` and `for (v of items)`.
DECISION_NODE_TYPES = frozenset(
    {
        "if_statement",
        "for_statement",
        "while_statement",
        "do_statement",
        "switch_statement",
        "catch_clause",
        "ternary_expression",
        "for_in_statement",
    }
)


def count_decision_points(root: SyntaxNode) -> int:
    return sum(1 for node in iter_nodes(root) if node.type in DECISION_NODE_TYPES)


def cyclomatic_complexity(tree: SyntaxTree) -> ComplexityReport:
    return ComplexityReport(cyclomatic_complexity=BASE_COMPLEXITY + count_decision_points(tree.root_node))
