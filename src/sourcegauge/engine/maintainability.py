from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

MIN_INDEX = 0.0
MAX_INDEX = 100.0


class ComputationError(ArithmeticError):
    """Raised internally when a metric formula yields a non-finite value."""


def raw_maintainability_index(cyclomatic_complexity: int, sloc: int) -> float:
    """
    Return the clamped maintainability index, raising on degenerate input.

    171 - 5.2*log10(cc) - 0.23*sloc - 16.2*log10(sloc) + 50*sin(sqrt(2.4*sloc)),
    clamped to [0, 100]. Callers should prefer `maintainability_index()`.
    """

    if sloc <= 0:
        return MIN_INDEX
    try:
        index = (
            171
            - 5.2 * math.log10(max(cyclomatic_complexity, 1))
            - 0.23 * sloc
            - 16.2 * math.log10(sloc)
            + 50 * math.sin(math.sqrt(2.4 * sloc))
        )
    except (ValueError, OverflowError, TypeError) as exc:
        raise ComputationError(f"maintainability index undefined for sloc={sloc!r}") from exc
    if not math.isfinite(index):
        raise ComputationError(f"maintainability index is not finite for sloc={sloc!r}")
    return max(MIN_INDEX, min(MAX_INDEX, index))


def maintainability_index(cyclomatic_complexity: int, sloc: int) -> float:
    """Maintainability index in [0, 100]; degenerate input scores 0."""

    try:
        return raw_maintainability_index(cyclomatic_complexity, sloc)
    except ComputationError as exc:
        logger.debug("%s; substituting %s", exc, MIN_INDEX)
        return MIN_INDEX
