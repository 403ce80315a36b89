"""Tests for CSV loading."""
from __future__ import annotations

import math

import pandas as pd
import pytest

from fuel_narrative.config import DataSources
from fuel_narrative.io.loader import auto_type, load_narrative_data, load_table


def write_csv(path, text: str):
    path.write_text(text, encoding="utf-8")
    return path


def test_load_table_types_and_drops_missing_years(tmp_path) -> None:
    path = write_csv(
        tmp_path / "vehicles.csv",
        "year,combMPG,make\n2000,20.5,Ford\n2001,,Honda\n,30,Mazda\n",
    )
    frame = load_table(path)
    assert len(frame) == 2
    assert pd.api.types.is_integer_dtype(frame["year"])
    assert frame["year"].tolist() == [2000, 2001]
    assert frame["combMPG"].iloc[0] == pytest.approx(20.5)
    assert math.isnan(frame["combMPG"].iloc[1])
    assert frame["make"].tolist() == ["Ford", "Honda"]


def test_load_table_requires_year(tmp_path) -> None:
    path = write_csv(tmp_path / "bad.csv", "model_year,combMPG\n2000,20\n")
    with pytest.raises(ValueError):
        load_table(path)


def test_auto_type_converts_numeric_text_only() -> None:
    df = pd.DataFrame({"a": ["1", " 2", ""], "b": ["x", "1", None], "c": [1.5, 2.5, 3.5]})
    out = auto_type(df)
    assert out["a"].iloc[:2].tolist() == [1, 2]
    assert math.isnan(out["a"].iloc[2])
    assert out["b"].iloc[0] == "x"
    assert out["c"].tolist() == [1.5, 2.5, 3.5]
    assert df["a"].tolist() == ["1", " 2", ""]


def test_load_narrative_data(tmp_path) -> None:
    write_csv(tmp_path / "full_vehicle_data.csv", "year,combMPG\n2000,20\n2000,22\n")
    write_csv(tmp_path / "guzzler_trends.csv", "year,guzzler_percentage,yoy_change\n2000,5.0,\n2001,6.0,1.0\n")
    write_csv(tmp_path / "cylinder_trends.csv", "year,avg_mpg_4cyl\n2000,25\n")
    write_csv(tmp_path / "co2_trends.csv", "year,avg_co2_gpm_overall\n2000,500\n2001,490\n2002,480\n")

    data = load_narrative_data(tmp_path)
    assert len(data.vehicle) == 2
    assert len(data.guzzler) == 2
    assert len(data.cylinder) == 1
    assert len(data.co2) == 3
    assert math.isnan(data.guzzler["yoy_change"].iloc[0])


def test_load_narrative_data_missing_file(tmp_path) -> None:
    with pytest.raises(OSError):
        load_narrative_data(tmp_path, DataSources(vehicle="nope.csv"))
