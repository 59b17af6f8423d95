from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

AnalysisStatus = Literal["analyzed", "failed"]

NOT_APPLICABLE = "N/A"
DEFAULT_LANGUAGE = "JavaScript"


@dataclass(frozen=True, slots=True)
class SourceUnit:
    file_name: str
    code: str


@dataclass(frozen=True, slots=True)
class LineReport:
    loc: int
    sloc: int
    lloc: int
    comments: int


@dataclass(frozen=True, slots=True)
class ComplexityReport:
    cyclomatic_complexity: int


@dataclass(frozen=True, slots=True)
class QualityReport:
    file_name: str
    loc: int
    lloc: int
    sloc: int
    comments: int
    comment_percentage: str
    code_to_comment_ratio: str
    cyclomatic_complexity: int
    maintainability_index: str
    language: str = DEFAULT_LANGUAGE

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the field names of the stored analysis record."""

        return {
            "fileName": self.file_name,
            "language": self.language,
            "loc": self.loc,
            "lloc": self.lloc,
            "sloc": self.sloc,
            "comments": self.comments,
            "commentPercentage": self.comment_percentage,
            "codeToCommentRatio": self.code_to_comment_ratio,
            "cyclomaticComplexity": self.cyclomatic_complexity,
            "maintainabilityIndex": self.maintainability_index,
        }
