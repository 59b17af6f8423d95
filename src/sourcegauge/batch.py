from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from sourcegauge.analyzer import analyze
from sourcegauge.config import SourceGaugeConfig
from sourcegauge.engine.parser import ParseError
from sourcegauge.engine.types import AnalysisStatus, QualityReport
from sourcegauge.gates import RuleViolation, evaluate_rules
from sourcegauge.validation import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AnalysisRecord:
    file_name: str
    status: AnalysisStatus
    report: QualityReport | None = None
    error_details: str | None = None
    violations: tuple[RuleViolation, ...] = ()
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class BatchResult:
    records: tuple[AnalysisRecord, ...]
    fail_under: int = 0

    @property
    def failed(self) -> tuple[AnalysisRecord, ...]:
        return tuple(r for r in self.records if r.status == "failed")

    @property
    def below_threshold(self) -> tuple[AnalysisRecord, ...]:
        if self.fail_under <= 0:
            return ()
        return tuple(
            r for r in self.records if r.report is not None and float(r.report.maintainability_index) < self.fail_under
        )

    @property
    def ok(self) -> bool:
        if self.failed or self.below_threshold:
            return False
        return not any(r.violations for r in self.records)


def analyze_source(file_name: str, code: str, *, config: SourceGaugeConfig, path: Path | None = None) -> AnalysisRecord:
    """Analyze one source unit, turning input errors into a failed record."""

    try:
        report = analyze(file_name, code, limits=config.limits)
    except ValidationError as exc:
        logger.warning("%s: %s", file_name, exc.reason)
        return AnalysisRecord(file_name=file_name, status="failed", error_details=exc.reason, path=path)
    except ParseError as exc:
        details = f"Invalid JavaScript code: {exc.message}"
        logger.warning("%s: %s", file_name, details)
        return AnalysisRecord(file_name=file_name, status="failed", error_details=details, path=path)

    return AnalysisRecord(
        file_name=file_name,
        status="analyzed",
        report=report,
        violations=evaluate_rules(report, config.rules),
        path=path,
    )


def analyze_paths(paths: Iterable[Path], *, config: SourceGaugeConfig) -> BatchResult:
    records: list[AnalysisRecord] = []
    for path in paths:
        try:
            code = path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.warning("could not read %s: %s", path, exc)
            records.append(AnalysisRecord(file_name=path.name, status="failed", error_details=str(exc), path=path))
        else:
            records.append(analyze_source(path.name, code, config=config, path=path))

    logger.debug("analyzed %d file(s), %d failed", len(records), sum(r.status == "failed" for r in records))
    return BatchResult(records=tuple(records), fail_under=config.fail_under)
