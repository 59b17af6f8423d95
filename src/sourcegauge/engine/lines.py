from __future__ import annotations

from dataclasses import dataclass

from sourcegauge.engine.types import LineReport

LINE_COMMENT = "//"
BLOCK_COMMENT_OPEN = "/*"
BLOCK_COMMENT_CLOSE = "*/"
LOGICAL_MARKERS = (";", "{", "}")


@dataclass(slots=True)
class _LineCounts:
    sloc: int = 0
    lloc: int = 0
    comments: int = 0
    in_block_comment: bool = False


def classify_lines(code: str) -> LineReport:
    """
    Count physical, source, logical and comment lines in one pass.

    Lines are split on "\\n" only; a trailing newline therefore yields one
    extra (empty) physical line. Blank lines count toward `loc` and nothing
    else.

    `//` is recognised anywhere on a line, including inside string and regex
    literals. This keeps the counts stable with previously stored reports.
    """

    lines = code.split("\n")
    counts = _LineCounts()
    for line in lines:
        _classify_line(line.strip(), counts)

    return LineReport(loc=len(lines), sloc=counts.sloc, lloc=counts.lloc, comments=counts.comments)


def _classify_line(stripped: str, counts: _LineCounts) -> None:
    if not stripped:
        return

    # An open block comment swallows the line, even if it starts a new "/*".
    if counts.in_block_comment:
        counts.comments += 1
        if BLOCK_COMMENT_CLOSE in stripped:
            counts.in_block_comment = False
        return

    if stripped.startswith(BLOCK_COMMENT_OPEN):
        counts.comments += 1
        if BLOCK_COMMENT_CLOSE not in stripped:
            counts.in_block_comment = True
        return

    if stripped.startswith(LINE_COMMENT):
        counts.comments += 1
        return

    if LINE_COMMENT in stripped:
        parts = stripped.split(LINE_COMMENT)
        code_part, comment_part = parts[0], parts[1]
        if comment_part.strip():
            counts.comments += 1
        if not code_part.strip():
            return

    if any(marker in stripped for marker in LOGICAL_MARKERS):
        counts.lloc += 1
    counts.sloc += 1
