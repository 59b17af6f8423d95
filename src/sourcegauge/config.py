from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, cast


class ConfigError(ValueError):
    """Raised when a SourceGauge configuration file is invalid."""


RuleStatus = Literal["active", "inactive"]
Condition = Literal["<", "<=", ">", ">=", "==", "!="]

DEFAULT_MAX_FILE_NAME_LENGTH = 20
DEFAULT_EXTENSION = ".js"
DEFAULT_FAIL_UNDER = 0

RULE_ID_RE = re.compile(r"^Rule[0-9]{3,}$")
CONDITIONS: tuple[str, ...] = ("<", "<=", ">", ">=", "==", "!=")
RULE_STATUSES: tuple[str, ...] = ("active", "inactive")
RULE_METRICS: tuple[str, ...] = (
    "loc",
    "sloc",
    "lloc",
    "comments",
    "comment_percentage",
    "code_to_comment_ratio",
    "cyclomatic_complexity",
    "maintainability_index",
)


@dataclass(frozen=True, slots=True)
class AnalysisLimits:
    """Entry preconditions applied before a source unit is analyzed."""

    max_file_name_length: int = DEFAULT_MAX_FILE_NAME_LENGTH
    extension: str = DEFAULT_EXTENSION


@dataclass(frozen=True, slots=True)
class QualityRule:
    rule_id: str
    name: str
    metric: str
    condition: Condition
    threshold: float
    description: str = ""
    status: RuleStatus = "active"

    @property
    def active(self) -> bool:
        return self.status == "active"


@dataclass(frozen=True, slots=True)
class SourceGaugeConfig:
    limits: AnalysisLimits = field(default_factory=AnalysisLimits)
    fail_under: int = DEFAULT_FAIL_UNDER
    rules: tuple[QualityRule, ...] = ()


def generate_rule_id(position: int) -> str:
    """Rule ids are sequential and 1-based: Rule001, Rule002, ..."""

    return f"Rule{position:03d}"


def load_config(project_dir: Path | str = ".") -> SourceGaugeConfig:
    """
    Load SourceGauge configuration from `pyproject.toml` within `project_dir`.

    If no file / no `[tool.sourcegauge]` table exists, returns defaults.
    """

    pyproject_path = Path(project_dir) / "pyproject.toml"
    if not pyproject_path.exists():
        return SourceGaugeConfig()

    try:
        data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {exc}") from exc

    tool_table = data.get("tool", {})
    if not isinstance(tool_table, dict):
        return SourceGaugeConfig()

    table = tool_table.get("sourcegauge", {})
    if not isinstance(table, dict) or not table:
        return SourceGaugeConfig()

    return parse_sourcegauge_table(table)


def parse_sourcegauge_table(table: dict[str, Any]) -> SourceGaugeConfig:
    max_len = table.get("max-file-name-length", table.get("max_file_name_length", DEFAULT_MAX_FILE_NAME_LENGTH))
    if not isinstance(max_len, int) or isinstance(max_len, bool):
        raise ConfigError("`tool.sourcegauge.max-file-name-length` must be an integer.")
    if max_len <= 0:
        raise ConfigError("`tool.sourcegauge.max-file-name-length` must be > 0.")

    extension = table.get("extension", DEFAULT_EXTENSION)
    if not isinstance(extension, str) or not extension.strip():
        raise ConfigError("`tool.sourcegauge.extension` must be a non-empty string.")
    extension = extension.strip()
    if not extension.startswith("."):
        extension = "." + extension

    fail_under = table.get("fail-under", table.get("fail_under", DEFAULT_FAIL_UNDER))
    if not isinstance(fail_under, int) or isinstance(fail_under, bool):
        raise ConfigError("`tool.sourcegauge.fail-under` must be an integer.")
    if not (0 <= fail_under <= 100):
        raise ConfigError("`tool.sourcegauge.fail-under` must be between 0 and 100.")

    return SourceGaugeConfig(
        limits=AnalysisLimits(max_file_name_length=max_len, extension=extension),
        fail_under=fail_under,
        rules=_parse_rules(table.get("rules", [])),
    )


def _parse_rules(value: Any) -> tuple[QualityRule, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError("`tool.sourcegauge.rules` must be an array of tables.")

    rules: list[QualityRule] = []
    seen: set[str] = set()
    for position, raw in enumerate(value, start=1):
        field_name = f"tool.sourcegauge.rules[{position - 1}]"
        if not isinstance(raw, dict):
            raise ConfigError(f"`{field_name}` must be a table.")
        rule = _parse_rule(raw, position=position, field_name=field_name)
        if rule.rule_id in seen:
            raise ConfigError(f"`{field_name}.id` duplicates another rule id: {rule.rule_id!r}.")
        seen.add(rule.rule_id)
        rules.append(rule)
    return tuple(rules)


def _parse_rule(raw: dict[str, Any], *, position: int, field_name: str) -> QualityRule:
    rule_id = raw.get("id")
    if rule_id is None:
        rule_id = generate_rule_id(position)
    elif not isinstance(rule_id, str) or not RULE_ID_RE.match(rule_id.strip()):
        raise ConfigError(f"`{field_name}.id` is invalid; expected a rule id like Rule001.")
    else:
        rule_id = rule_id.strip()

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ConfigError(f"`{field_name}.name` must be a non-empty string.")

    metric = raw.get("metric")
    if not isinstance(metric, str) or metric.strip().lower() not in RULE_METRICS:
        valid = ", ".join(RULE_METRICS)
        raise ConfigError(f"`{field_name}.metric` must be one of: {valid}.")

    condition = raw.get("condition")
    if not isinstance(condition, str) or condition.strip() not in CONDITIONS:
        valid = ", ".join(CONDITIONS)
        raise ConfigError(f"`{field_name}.condition` must be one of: {valid}.")

    threshold = raw.get("threshold")
    if not isinstance(threshold, int | float) or isinstance(threshold, bool):
        raise ConfigError(f"`{field_name}.threshold` must be a number.")

    description = raw.get("description", "")
    if not isinstance(description, str):
        raise ConfigError(f"`{field_name}.description` must be a string.")

    status = raw.get("status", "active")
    if not isinstance(status, str) or status.strip().lower() not in RULE_STATUSES:
        raise ConfigError(f"`{field_name}.status` must be one of: active, inactive.")

    return QualityRule(
        rule_id=rule_id,
        name=name.strip(),
        metric=metric.strip().lower(),
        condition=cast(Condition, condition.strip()),
        threshold=float(threshold),
        description=description,
        status=cast(RuleStatus, status.strip().lower()),
    )
