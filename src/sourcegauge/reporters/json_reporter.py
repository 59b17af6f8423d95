from __future__ import annotations

import json
from typing import Any

from sourcegauge import __version__
from sourcegauge.batch import AnalysisRecord, BatchResult
from sourcegauge.config import QualityRule

REPORT_SCHEMA_VERSION = 1


def render_json(result: BatchResult) -> str:
    payload = {
        "schema_version": REPORT_SCHEMA_VERSION,
        "tool": {"name": "SourceGauge", "version": __version__},
        "ok": result.ok,
        "fail_under": result.fail_under,
        "files": [_record_to_dict(r) for r in result.records],
    }
    return json.dumps(payload, indent=2, sort_keys=False)


def rule_to_dict(rule: QualityRule) -> dict[str, Any]:
    return {
        "ruleID": rule.rule_id,
        "ruleName": rule.name,
        "description": rule.description,
        "metric": rule.metric,
        "condition": rule.condition,
        "threshold": rule.threshold,
        "status": rule.status,
    }


def _record_to_dict(record: AnalysisRecord) -> dict[str, Any]:
    out: dict[str, Any] = {
        "fileName": record.file_name,
        "status": record.status,
        "errorDetails": record.error_details,
    }
    if record.report is not None:
        out.update(record.report.to_dict())
    out["violations"] = [
        {"ruleID": v.rule.rule_id, "ruleName": v.rule.name, "value": v.value, "message": v.message}
        for v in record.violations
    ]
    return out
