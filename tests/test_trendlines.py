"""Unit tests for least-squares trendlines."""
from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from fuel_narrative.analysis.trendlines import DEGENERATE_FIT, eval_linear, fit_linear, fit_series


def test_fit_linear_exact() -> None:
    fit = fit_linear([2000, 2001, 2002], [20, 22, 24])
    assert fit.slope == pytest.approx(2.0)
    assert fit.intercept == pytest.approx(-3980.0)
    assert fit.r2 == pytest.approx(1.0)
    assert fit.n == 3


def test_fit_linear_recovers_coefficients() -> None:
    rng = np.random.default_rng(0)
    x = np.linspace(0, 10, 50)
    y = 2 * x + 1 + rng.normal(scale=0.1, size=x.shape)
    fit = fit_linear(x, y)
    assert abs(fit.slope - 2.0) < 0.1
    assert abs(fit.intercept - 1.0) < 0.1
    assert fit.r2 > 0.95


def test_fit_is_order_independent() -> None:
    rng = np.random.default_rng(3)
    x = np.arange(1980, 2021, dtype=float)
    y = 0.3 * x - 570 + rng.normal(scale=0.5, size=x.shape)
    order = rng.permutation(x.size)
    a = fit_linear(x, y)
    b = fit_linear(x[order], y[order])
    assert b.slope == pytest.approx(a.slope, rel=1e-9)
    assert b.intercept == pytest.approx(a.intercept, rel=1e-9)
    assert b.r2 == pytest.approx(a.r2, rel=1e-9)


def test_constant_y_reports_r2_of_one() -> None:
    xs = list(range(2000, 2011))
    fit = fit_linear(xs, [5] * len(xs))
    assert fit.r2 == 1.0
    assert fit.slope == 0.0
    assert fit.intercept == pytest.approx(5.0)


def test_constant_x_falls_back_to_mean() -> None:
    fit = fit_linear([2000, 2000], [1.0, 3.0])
    assert fit.slope == 0.0
    assert fit.intercept == pytest.approx(2.0)
    assert fit.r2 == 1.0


def test_degenerate_series() -> None:
    for xs, ys in (([], []), ([2000], [20]), ([2000, 2001], [None, 3.0])):
        fit = fit_linear(xs, ys)
        assert (fit.slope, fit.intercept, fit.r2) == (0, 0, 0)


def test_nulls_and_non_finite_pairs_are_skipped() -> None:
    fit = fit_linear([2000, 2001, 2002, float("nan")], [20, None, 24, 3])
    assert fit.n == 2
    assert fit.slope == pytest.approx(2.0)
    assert fit.intercept == pytest.approx(-3980.0)
    assert fit.r2 == pytest.approx(1.0)


def test_mismatched_lengths() -> None:
    with pytest.raises(ValueError):
        fit_linear([1, 2, 3], [1, 2])


def test_predict_and_segment() -> None:
    fit = fit_linear([2000, 2001, 2002], [20, 22, 24])
    assert fit.predict(2010) == pytest.approx(40.0)
    assert eval_linear(np.array([0.0, 1.0]), 2.0, 1.0).tolist() == [1.0, 3.0]
    (x1, y1), (x2, y2) = fit.segment(2000, 2002)
    assert (x1, x2) == (2000.0, 2002.0)
    assert y1 == pytest.approx(20.0)
    assert y2 == pytest.approx(24.0)


def test_fit_series_from_frame() -> None:
    df = pd.DataFrame({"year": [2002, 2000, 2001], "avg_mpg_4cyl": [24.0, 20.0, np.nan]})
    fit = fit_series(df, "year", "avg_mpg_4cyl")
    assert fit.slope == pytest.approx(2.0)
    assert fit_series(df, "year", "missing") == DEGENERATE_FIT
