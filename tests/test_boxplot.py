"""Unit tests for box-plot summary statistics."""
from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from fuel_narrative.analysis.boxplot import group_and_summarize, quantile_sorted, summarize


def test_single_observation() -> None:
    summary = summarize([10])
    assert summary is not None
    assert summary.q1 == summary.median == summary.q3 == 10
    assert summary.iqr == 0
    assert summary.outliers == ()
    assert summary.whisker_min == summary.whisker_max == 10
    assert summary.count == 1


def test_linear_interpolation_and_outlier() -> None:
    summary = summarize([1, 2, 3, 4, 5, 6, 7, 8, 9, 100])
    assert summary is not None
    assert summary.q1 == pytest.approx(3.25)
    assert summary.median == pytest.approx(5.5)
    assert summary.q3 == pytest.approx(7.75)
    assert summary.iqr == pytest.approx(4.5)
    assert summary.upper_fence == pytest.approx(14.5)
    assert summary.outliers == (100.0,)
    assert summary.whisker_min == 1
    assert summary.whisker_max == 9


def test_input_order_does_not_matter() -> None:
    summary = summarize([100, 9, 1, 8, 2, 7, 3, 6, 4, 5])
    assert summary is not None
    assert summary.median == pytest.approx(5.5)
    assert summary.outliers == (100.0,)


def test_nulls_and_non_finite_are_ignored() -> None:
    summary = summarize([None, float("nan"), math.inf, 4, 2])
    assert summary is not None
    assert summary.count == 2
    assert summary.median == pytest.approx(3.0)


def test_empty_input_has_no_summary() -> None:
    assert summarize([]) is None
    assert summarize([None, float("nan")]) is None


def test_quantile_sorted_endpoints() -> None:
    values = np.array([1.0, 2.0, 4.0])
    assert quantile_sorted(values, 0.0) == 1.0
    assert quantile_sorted(values, 1.0) == 4.0
    assert quantile_sorted(values, 0.75) == pytest.approx(3.0)
    with pytest.raises(ValueError):
        quantile_sorted(np.array([]), 0.5)


def test_summary_invariants_on_random_samples() -> None:
    rng = np.random.default_rng(7)
    for size in (2, 3, 5, 17, 60):
        values = np.concatenate([rng.normal(25, 4, size), rng.normal(60, 1, 1)])
        summary = summarize(values)
        assert summary is not None
        assert summary.q1 <= summary.median <= summary.q3
        for outlier in summary.outliers:
            assert outlier < summary.lower_fence or outlier > summary.upper_fence
        assert summary.lower_fence <= summary.whisker_min <= summary.whisker_max <= summary.upper_fence
        assert summary.count == len(values)


def test_group_and_summarize_frame() -> None:
    df = pd.DataFrame(
        {
            "year": [2001, 2000, 2001, 2002, 2000],
            "combMPG": [1.0, 5.0, 3.0, None, 7.0],
        }
    )
    result = group_and_summarize(df, "year", "combMPG")
    assert list(result) == [2001, 2000]
    assert result[2001].median == pytest.approx(2.0)
    assert result[2000].median == pytest.approx(6.0)
    assert 2002 not in result


def test_group_and_summarize_callables() -> None:
    records = [
        {"year": 2000, "mpg": 20},
        {"year": 2000, "mpg": 22},
        {"year": 2010, "mpg": 30},
    ]
    result = group_and_summarize(records, lambda r: r["year"] // 10 * 10, lambda r: r["mpg"])
    assert set(result) == {2000, 2010}
    assert result[2000].median == pytest.approx(21.0)
    assert group_and_summarize([], "year", "mpg") == {}
