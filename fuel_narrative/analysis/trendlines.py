"""Ordinary-least-squares trendlines."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple, Union

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class RegressionResult:
    """Slope, intercept and R² of a linear fit ``y = slope * x + intercept``."""

    slope: float
    intercept: float
    r2: float
    n: int = 0

    def predict(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        return eval_linear(x, self.slope, self.intercept)

    def segment(self, x_min: float, x_max: float) -> List[Tuple[float, float]]:
        """Endpoints of the fitted line between ``x_min`` and ``x_max``."""

        return [(float(x_min), float(self.predict(x_min))), (float(x_max), float(self.predict(x_max)))]


DEGENERATE_FIT = RegressionResult(slope=0.0, intercept=0.0, r2=0.0, n=0)


def eval_linear(x: Union[float, np.ndarray], m: float, b: float) -> Union[float, np.ndarray]:
    return m * x + b


def _as_float_array(values: Iterable[Any]) -> np.ndarray:
    series = pd.to_numeric(pd.Series(list(values), dtype=object), errors="coerce")
    return series.to_numpy(dtype=float)


def fit_linear(x: Sequence[Any], y: Sequence[Any]) -> RegressionResult:
    """Fit a least-squares line through the finite ``(x, y)`` pairs.

    Pairs with a null or non-finite coordinate are ignored. Fewer than two
    usable pairs give ``DEGENERATE_FIT``. When ``n·Σx² − (Σx)²`` or
    ``n·Σy² − (Σy)²`` is zero, R² is reported as 1; with all ``x`` equal the
    slope is 0 and the intercept is the mean of ``y``.
    """

    xs = _as_float_array(x)
    ys = _as_float_array(y)
    if xs.shape != ys.shape:
        raise ValueError(f"x and y must have the same length, got {xs.size} and {ys.size}")

    mask = np.isfinite(xs) & np.isfinite(ys)
    xs = xs[mask]
    ys = ys[mask]
    n = int(xs.size)
    if n < 2:
        return DEGENERATE_FIT

    sum_x = float(np.sum(xs))
    sum_y = float(np.sum(ys))
    sum_xy = float(np.sum(xs * ys))
    sum_xx = float(np.sum(xs * xs))
    sum_yy = float(np.sum(ys * ys))

    cov_term = n * sum_xy - sum_x * sum_y
    x_term = n * sum_xx - sum_x * sum_x
    y_term = n * sum_yy - sum_y * sum_y

    slope = cov_term / x_term if x_term != 0 else 0.0
    intercept = (sum_y - slope * sum_x) / n
    r2_denom = x_term * y_term
    r2 = 1.0 if r2_denom == 0 else cov_term**2 / r2_denom
    return RegressionResult(slope=slope, intercept=intercept, r2=r2, n=n)


def fit_series(records: Union[pd.DataFrame, Iterable[dict]], x_col: str, y_col: str) -> RegressionResult:
    """Fit ``y_col`` against ``x_col`` over a table of records."""

    frame = records if isinstance(records, pd.DataFrame) else pd.DataFrame.from_records(list(records))
    if frame.empty or x_col not in frame.columns or y_col not in frame.columns:
        return DEGENERATE_FIT
    return fit_linear(frame[x_col].tolist(), frame[y_col].tolist())
