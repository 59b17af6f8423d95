"""Source metrics for JavaScript: line counts, complexity, maintainability."""

from __future__ import annotations

__version__ = "0.1.0"

from sourcegauge.analyzer import analyze  # noqa: E402
from sourcegauge.config import ConfigError  # noqa: E402
from sourcegauge.engine.maintainability import ComputationError  # noqa: E402
from sourcegauge.engine.parser import ParseError  # noqa: E402
from sourcegauge.engine.types import QualityReport  # noqa: E402
from sourcegauge.validation import ValidationError  # noqa: E402

__all__ = [
    "ComputationError",
    "ConfigError",
    "ParseError",
    "QualityReport",
    "ValidationError",
    "__version__",
    "analyze",
]
