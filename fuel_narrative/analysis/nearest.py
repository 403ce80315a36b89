"""Nearest-record lookup along a sorted x coordinate."""
from __future__ import annotations

import math
from bisect import bisect_left
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from fuel_narrative.models.dataset import Record, frame_records


class NearestPointIndex:
    """Binary-search index over records sorted ascending by ``x_key``.

    The index keeps positions into the sequence it was built from; build a new
    one whenever that sequence changes.
    """

    def __init__(self, records: Sequence[Record], x_key: str = "year") -> None:
        xs: List[float] = []
        for record in records:
            value = record.get(x_key)
            xs.append(float("nan") if value is None else float(value))
        if any(b < a for a, b in zip(xs, xs[1:])) or any(math.isnan(v) for v in xs):
            raise ValueError(f"records must be sorted by a non-null {x_key!r}")
        self.records = records
        self.x_key = x_key
        self._xs = xs

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, x_key: str = "year") -> "NearestPointIndex":
        """Build an index over ``frame`` sorted by ``x_key`` (the frame is not modified)."""

        ordered = frame.dropna(subset=[x_key]).sort_values(x_key, kind="mergesort")
        return cls(frame_records(ordered), x_key=x_key)

    def __len__(self) -> int:
        return len(self._xs)

    def query(self, x0: float) -> Optional[int]:
        """Return the position of the record nearest to ``x0``.

        Returns ``None`` when ``x0`` lies outside the indexed x extent. Ties
        resolve to the lower position, so an exact hit on a repeated x returns
        its first occurrence.
        """

        n = len(self._xs)
        if n == 0 or x0 is None or not math.isfinite(x0):
            return None
        if x0 < self._xs[0] or x0 > self._xs[-1]:
            return None
        if n == 1:
            return 0
        i = bisect_left(self._xs, x0, 1)
        before = x0 - self._xs[i - 1]
        after = self._xs[i] - x0
        return i if after < before else i - 1

    def nearest(self, x0: float) -> Optional[Dict[str, Any]]:
        """Return the record nearest to ``x0``, or ``None`` when out of range."""

        position = self.query(x0)
        if position is None:
            return None
        return self.records[position]
