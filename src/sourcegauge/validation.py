from __future__ import annotations

from sourcegauge.config import AnalysisLimits
from sourcegauge.engine.parser import parse_strict
from sourcegauge.engine.types import SourceUnit


class ValidationError(ValueError):
    """Raised when a source unit fails a structural precondition."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def check_source_unit(unit: SourceUnit, limits: AnalysisLimits | None = None) -> None:
    """
    Check file name and code presence, name length and extension.

    Never touches the parser, so callers can reject input cheaply.
    """

    limits = limits or AnalysisLimits()
    if not unit.file_name or not unit.code:
        raise ValidationError("File name and code are required")
    if len(unit.file_name) > limits.max_file_name_length:
        raise ValidationError(f"File name cannot exceed {limits.max_file_name_length} characters.")
    if not unit.file_name.endswith(limits.extension):
        raise ValidationError(f"File name must end with {limits.extension}")


def validate_source_unit(unit: SourceUnit, limits: AnalysisLimits | None = None) -> None:
    """Run the structural checks, then a strict (non-recovering) parse."""

    check_source_unit(unit, limits)
    parse_strict(unit.code)
