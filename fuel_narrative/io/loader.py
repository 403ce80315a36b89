"""CSV loading utilities for the fuel-economy tables."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype

from fuel_narrative.config import DataSources
from fuel_narrative.models.dataset import NarrativeData
from fuel_narrative.utils.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def _normalize_column_name(name: str) -> str:
    return str(name).strip()


def auto_type(df: pd.DataFrame) -> pd.DataFrame:
    """Convert text columns to numbers where every non-empty value is numeric.

    Blank cells become null; columns with any non-numeric text stay as text.
    """

    df = df.copy()
    for col in df.columns:
        if is_numeric_dtype(df[col]) or is_bool_dtype(df[col]):
            continue
        stripped = df[col].map(lambda v: v.strip() if isinstance(v, str) else v).astype(object)
        stripped = stripped.where(stripped != "", None)
        converted = pd.to_numeric(stripped, errors="coerce")
        if converted.notna().sum() == stripped.notna().sum():
            df[col] = converted
        else:
            df[col] = stripped
    return df


def load_table(path: PathLike) -> pd.DataFrame:
    """Load one CSV with a required ``year`` column.

    Rows without a year are dropped and ``year`` becomes an integer column.
    """

    path = Path(path)
    frame = pd.read_csv(path, skipinitialspace=True)
    frame = frame.rename(columns=_normalize_column_name)
    frame = auto_type(frame)
    if "year" not in frame.columns:
        raise ValueError(f"{path.name} must contain a 'year' column")

    frame["year"] = pd.to_numeric(frame["year"], errors="coerce")
    missing = int(frame["year"].isna().sum())
    if missing:
        logger.warning("Dropping %d rows without a year from %s", missing, path.name)
        frame = frame.dropna(subset=["year"])
    return frame.astype({"year": int}).reset_index(drop=True)


def load_narrative_data(data_dir: PathLike, sources: Optional[DataSources] = None) -> NarrativeData:
    """Load the four tables named by ``sources`` from ``data_dir``."""

    sources = sources or DataSources()
    root = Path(data_dir)
    tables: Dict[str, pd.DataFrame] = {}
    for name, file_name in sources.as_dict().items():
        if not file_name:
            raise ValueError(f"No file configured for the {name} table")
        tables[name] = load_table(root / file_name)
        logger.info("Loaded %d rows from %s", len(tables[name]), file_name)
    return NarrativeData(**tables)
