from __future__ import annotations

import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from sourcegauge.config import QualityRule
from sourcegauge.engine.types import NOT_APPLICABLE, QualityReport

_OPERATORS: dict[str, Callable[[float, float], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "==": operator.eq,
    "!=": operator.ne,
}


@dataclass(frozen=True, slots=True)
class RuleViolation:
    rule: QualityRule
    value: float

    @property
    def message(self) -> str:
        return f"{self.rule.metric} = {self.value:g} ({self.rule.condition} {self.rule.threshold:g})"


def metric_value(report: QualityReport, metric: str) -> float | None:
    """Numeric value of `metric` in `report`, or None when not applicable."""

    raw = getattr(report, metric)
    if raw == NOT_APPLICABLE:
        return None
    return float(raw)


def evaluate_rules(report: QualityReport, rules: Iterable[QualityRule]) -> tuple[RuleViolation, ...]:
    """
    Return the active rules whose condition holds for `report`.

    Conditions describe the failing state, e.g. `cyclomatic_complexity > 10`.
    """

    violations: list[RuleViolation] = []
    for rule in rules:
        if not rule.active:
            continue
        value = metric_value(report, rule.metric)
        if value is None:
            continue
        if _OPERATORS[rule.condition](value, rule.threshold):
            violations.append(RuleViolation(rule=rule, value=value))
    return tuple(violations)


def toggle_status(rule: QualityRule) -> QualityRule:
    return replace(rule, status="inactive" if rule.active else "active")


def search_rules(rules: Iterable[QualityRule], term: str | None) -> tuple[QualityRule, ...]:
    """Case-insensitive substring search over rule ids and names."""

    needle = (term or "").strip().lower()
    if not needle:
        return tuple(rules)
    return tuple(r for r in rules if needle in r.rule_id.lower() or needle in r.name.lower())
