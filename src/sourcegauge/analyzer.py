from __future__ import annotations

import logging

from sourcegauge.config import AnalysisLimits
from sourcegauge.engine.complexity import cyclomatic_complexity
from sourcegauge.engine.lines import classify_lines
from sourcegauge.engine.maintainability import maintainability_index
from sourcegauge.engine.parser import parse_tolerant
from sourcegauge.engine.types import NOT_APPLICABLE, QualityReport, SourceUnit
from sourcegauge.validation import validate_source_unit

logger = logging.getLogger(__name__)


def analyze(file_name: str, code: str, *, limits: AnalysisLimits | None = None) -> QualityReport:
    """
    Analyze one JavaScript source unit and return its quality report.

    Raises ValidationError for bad file names or empty input (before the
    parser runs) and ParseError when `code` is not valid JavaScript.
    """

    unit = SourceUnit(file_name=file_name, code=code)
    validate_source_unit(unit, limits)
    return build_report(unit)


def build_report(unit: SourceUnit) -> QualityReport:
    """Compute metrics for an already validated source unit."""

    lines = classify_lines(unit.code)
    complexity = cyclomatic_complexity(parse_tolerant(unit.code))
    index = maintainability_index(complexity.cyclomatic_complexity, lines.sloc)

    report = QualityReport(
        file_name=unit.file_name,
        loc=lines.loc,
        lloc=lines.lloc,
        sloc=lines.sloc,
        comments=lines.comments,
        comment_percentage=_format_ratio(lines.comments * 100, lines.loc, default="0.00"),
        code_to_comment_ratio=_format_ratio(lines.sloc, lines.comments, default=NOT_APPLICABLE),
        cyclomatic_complexity=complexity.cyclomatic_complexity,
        maintainability_index=_format_decimal(index),
    )
    logger.debug(
        "%s: loc=%d sloc=%d comments=%d cc=%d mi=%s",
        unit.file_name,
        report.loc,
        report.sloc,
        report.comments,
        report.cyclomatic_complexity,
        report.maintainability_index,
    )
    return report


def _format_decimal(value: float) -> str:
    return f"{value:.2f}"


def _format_ratio(numerator: int, denominator: int, *, default: str) -> str:
    if denominator <= 0:
        return default
    return _format_decimal(numerator / denominator)
