from __future__ import annotations

import pytest

from sourcegauge.engine.types import QualityReport


@pytest.fixture()
def sample_report() -> QualityReport:
    return QualityReport(
        file_name="app.js",
        loc=40,
        lloc=20,
        sloc=30,
        comments=5,
        comment_percentage="12.50",
        code_to_comment_ratio="6.00",
        cyclomatic_complexity=12,
        maintainability_index="54.31",
    )
