"""Read-only datasets backing the four scenes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

import pandas as pd

# One row of a table: column name -> number, string or None for a missing cell.
Record = Dict[str, Any]


def frame_records(frame: pd.DataFrame) -> List[Record]:
    """Convert ``frame`` rows to plain dicts with ``None`` for missing cells."""

    if frame.empty:
        return []
    plain = frame.astype(object).where(frame.notna(), None)
    return plain.to_dict(orient="records")


@dataclass(frozen=True)
class NarrativeData:
    """The four tables loaded for a session.

    Attributes
    ----------
    vehicle:
        One row per tested vehicle (``year``, ``combMPG``, ...).
    guzzler:
        Yearly gas-guzzler share (``year``, ``guzzler_percentage``, ``yoy_change``).
    cylinder:
        Yearly average MPG overall and per cylinder class.
    co2:
        Yearly average CO₂ grams/mile overall and per cylinder class.

    The frames are shared by every scene and are never modified; render passes
    derive filtered or sorted copies.
    """

    vehicle: pd.DataFrame = field(default_factory=pd.DataFrame)
    guzzler: pd.DataFrame = field(default_factory=pd.DataFrame)
    cylinder: pd.DataFrame = field(default_factory=pd.DataFrame)
    co2: pd.DataFrame = field(default_factory=pd.DataFrame)

    def table(self, name: str) -> pd.DataFrame:
        if name not in ("vehicle", "guzzler", "cylinder", "co2"):
            raise KeyError(f"Unknown dataset {name!r}")
        return getattr(self, name)
