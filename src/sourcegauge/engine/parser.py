from __future__ import annotations

import re
import threading
from collections.abc import Iterator
from functools import lru_cache
from typing import Any, Protocol, cast

import esprima
import tree_sitter_javascript
from esprima.error_handler import Error as EsprimaError
from tree_sitter import Language, Parser

END_OF_INPUT = "Unexpected end of input"

_LINE_PREFIX = re.compile(r"^Line \d+: ")


class SyntaxNode(Protocol):
    # tree-sitter Node; we only rely on these attributes.
    type: str
    children: list[Any]
    is_missing: bool
    has_error: bool
    start_point: tuple[int, int]


class SyntaxTree(Protocol):
    root_node: Any


class ParseError(ValueError):
    """Raised when source text cannot be parsed as JavaScript."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@lru_cache(maxsize=1)
def _get_language() -> Language:
    return Language(tree_sitter_javascript.language())


_PARSER_LOCAL = threading.local()


def _get_parser() -> Parser:
    """
    Return a per-thread Parser instance.

    tree-sitter Parser objects are not thread-safe; sharing a single cached
    Parser across threads can lead to crashes or corrupted parse output.
    """

    parser: Parser | None = getattr(_PARSER_LOCAL, "parser", None)
    if parser is None:
        parser = Parser(_get_language())
        _PARSER_LOCAL.parser = parser
    return parser


def parse_tolerant(code: str) -> SyntaxTree:
    """
    Parse `code`, recovering from syntax errors.

    The returned tree may contain ERROR and MISSING nodes. ParseError is raised
    only when tree-sitter produces no tree at all.
    """

    try:
        tree = _get_parser().parse(code.encode("utf-8", errors="replace"))
    except (ValueError, TypeError, RuntimeError) as exc:
        raise ParseError(f"Code Parsing Error: {exc}") from exc
    if tree is None:
        raise ParseError("Code Parsing Error: parser returned no tree")
    return cast(SyntaxTree, tree)


def parse_strict(code: str) -> SyntaxTree:
    """
    Parse `code` as a classic script with no error tolerance.

    esprima decides validity, so early errors (a top-level `return`, a
    duplicate class constructor) and grammar extensions such as JSX are
    rejected. On success the tree-sitter tree from `parse_tolerant` is
    returned for the complexity walker.
    """

    tree = parse_tolerant(code)
    try:
        esprima.parseScript(code)
    except EsprimaError as exc:
        raise ParseError(_describe_rejection(exc, tree.root_node)) from exc
    except RecursionError as exc:
        raise ParseError("Code is nested too deeply to validate") from exc
    return tree


def iter_nodes(root: SyntaxNode) -> Iterator[SyntaxNode]:
    """Yield every node under `root` (inclusive) exactly once, pre-order."""

    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(getattr(node, "children", [])))


def _describe_rejection(exc: EsprimaError, root: SyntaxNode) -> str:
    description = getattr(exc, "description", None) or _LINE_PREFIX.sub("", str(exc))
    if description == END_OF_INPUT:
        # tree-sitter knows which closing token the input is missing.
        missing = next((node for node in iter_nodes(root) if node.is_missing), None)
        if missing is not None:
            row, column = missing.start_point
            return f'Missing "{missing.type}" at line {row + 1}, column {column + 1}'

    line = getattr(exc, "lineNumber", None)
    column = getattr(exc, "column", None)
    if line is None or column is None:
        return description
    return f"{description} at line {line}, column {column}"
