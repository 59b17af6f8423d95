from __future__ import annotations

import math

import pytest

from sourcegauge.engine.maintainability import (
    ComputationError,
    maintainability_index,
    raw_maintainability_index,
)


@pytest.mark.parametrize("sloc", [0, -1, -100])
def test_non_positive_sloc_scores_zero(sloc: int) -> None:
    assert maintainability_index(5, sloc) == 0


def test_small_programs_are_clamped_to_100() -> None:
    assert maintainability_index(2, 6) == 100


def test_unclamped_value_follows_formula() -> None:
    expected = 171 - 0.23 * 200 - 16.2 * math.log10(200) + 50 * math.sin(math.sqrt(2.4 * 200))
    assert 0 < expected < 100
    assert maintainability_index(1, 200) == pytest.approx(expected)


def test_complexity_below_one_is_treated_as_one() -> None:
    assert maintainability_index(0, 200) == maintainability_index(1, 200)


def test_large_programs_are_clamped_to_zero() -> None:
    assert maintainability_index(50, 5000) == 0


def test_index_is_bounded_over_a_range_of_sizes() -> None:
    for sloc in range(1, 2000, 7):
        for cc in (1, 3, 40):
            value = maintainability_index(cc, sloc)
            assert 0 <= value <= 100


def test_non_numeric_sloc_raises_internally() -> None:
    with pytest.raises(ComputationError):
        raw_maintainability_index(1, float("nan"))  # type: ignore[arg-type]


def test_non_numeric_sloc_is_normalized_to_zero() -> None:
    assert maintainability_index(1, float("nan")) == 0  # type: ignore[arg-type]
    assert maintainability_index(1, float("inf")) == 0  # type: ignore[arg-type]
