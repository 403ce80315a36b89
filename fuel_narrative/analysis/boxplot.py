"""Box-plot summary statistics with Tukey outlier classification."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, Optional, Tuple, Union

import numpy as np
import pandas as pd

from fuel_narrative.utils.logging import get_logger

logger = get_logger(__name__)

FENCE_FACTOR = 1.5

ColumnSelector = Union[str, Callable[[Any], Any]]


@dataclass(frozen=True)
class BoxPlotSummary:
    """Five-number summary of one category.

    Attributes
    ----------
    q1, median, q3:
        Quartiles from linear interpolation between order statistics.
    whisker_min, whisker_max:
        Smallest and largest observations inside the fences. These are data
        values, not the fences themselves.
    outliers:
        Observations strictly outside ``[lower_fence, upper_fence]``, ascending.
    count:
        Number of finite observations summarized.
    """

    q1: float
    median: float
    q3: float
    whisker_min: float
    whisker_max: float
    outliers: Tuple[float, ...]
    count: int

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1

    @property
    def lower_fence(self) -> float:
        return self.q1 - FENCE_FACTOR * self.iqr

    @property
    def upper_fence(self) -> float:
        return self.q3 + FENCE_FACTOR * self.iqr


def finite_values(observations: Iterable[Any]) -> np.ndarray:
    """Return the finite numeric observations as a float array, nulls dropped."""

    series = pd.to_numeric(pd.Series(list(observations), dtype=object), errors="coerce")
    values = series.to_numpy(dtype=float)
    return values[np.isfinite(values)]


def quantile_sorted(values: np.ndarray, p: float) -> float:
    """Quantile of an ascending array at probability ``p``.

    Uses the fractional index ``h = p * (n - 1)`` and interpolates linearly
    between ``values[floor(h)]`` and ``values[ceil(h)]``.
    """

    n = len(values)
    if n == 0:
        raise ValueError("quantile of an empty sequence")
    h = p * (n - 1)
    lo = math.floor(h)
    hi = math.ceil(h)
    return float(values[lo] + (h - lo) * (values[hi] - values[lo]))


def summarize(observations: Iterable[Any]) -> Optional[BoxPlotSummary]:
    """Summarize one category, or return ``None`` when nothing finite remains."""

    values = np.sort(finite_values(observations))
    if values.size == 0:
        return None

    q1 = quantile_sorted(values, 0.25)
    median = quantile_sorted(values, 0.5)
    q3 = quantile_sorted(values, 0.75)
    iqr = q3 - q1
    lower = q1 - FENCE_FACTOR * iqr
    upper = q3 + FENCE_FACTOR * iqr

    outside = (values < lower) | (values > upper)
    inside = values[~outside]
    return BoxPlotSummary(
        q1=q1,
        median=median,
        q3=q3,
        whisker_min=float(inside[0]),
        whisker_max=float(inside[-1]),
        outliers=tuple(float(v) for v in values[outside]),
        count=int(values.size),
    )


def _column(frame: pd.DataFrame, selector: ColumnSelector) -> pd.Series:
    if callable(selector):
        return frame.apply(lambda row: selector(row.to_dict()), axis=1)
    if selector not in frame.columns:
        raise KeyError(f"Column {selector!r} not found")
    return frame[selector]


def group_and_summarize(
    records: Union[pd.DataFrame, Iterable[Dict[str, Any]]],
    key: ColumnSelector,
    value: ColumnSelector,
) -> Dict[Hashable, BoxPlotSummary]:
    """Group records by ``key`` and summarize ``value`` within each group.

    ``key`` and ``value`` are column names or callables taking a record dict.
    Groups come back in order of first appearance; groups without any finite
    value are left out.
    """

    frame = records if isinstance(records, pd.DataFrame) else pd.DataFrame.from_records(list(records))
    if frame.empty:
        return {}

    pairs = pd.DataFrame({"key": _column(frame, key), "value": _column(frame, value)})
    summaries: Dict[Hashable, BoxPlotSummary] = {}
    for group_key, group in pairs.groupby("key", sort=False, dropna=True):
        if isinstance(group_key, np.generic):
            group_key = group_key.item()
        summary = summarize(group["value"])
        if summary is None:
            logger.debug("No finite observations for %r; skipping", group_key)
            continue
        summaries[group_key] = summary
    return summaries
