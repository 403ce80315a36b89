"""Tests for the scene render passes and hover inspection."""
from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from fuel_narrative.analysis.boxplot import BoxPlotSummary
from fuel_narrative.config import LayoutConfig
from fuel_narrative.models.scenes import Scene
from fuel_narrative.plotting.instructions import PointMarker, Polyline, Rect
from fuel_narrative.plotting.scenes import (
    render_cylinder_trend,
    render_distribution,
    render_emissions_trend,
    render_guzzler_trend,
    render_scene,
)

LAYOUT = LayoutConfig()  # inner area 840 x 410


def build_vehicle_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "year": [2000] * 6 + [2001] * 3 + [2002],
            "combMPG": [20.0, 21.0, 22.0, 23.0, 24.0, 40.0, 25.0, 26.0, 27.0, np.nan],
        }
    )


def build_cylinder_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "year": [2002, 2000, 2001],
            "avg_comb_mpg_overall": [21.0, 19.0, 20.0],
            "avg_mpg_4cyl": [24.0, 20.0, 22.0],
            "avg_mpg_6cyl": [19.0, 17.0, np.nan],
            "avg_mpg_8cyl": [np.nan, np.nan, np.nan],
        }
    )


def build_guzzler_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "year": [2000, 2001, 2002, 2003],
            "guzzler_percentage": [5.0, 6.0, 4.0, np.nan],
            "yoy_change": [np.nan, 1.0, -2.0, 0.5],
        }
    )


def of_type(render, kind):
    return [item for item in render.instructions if isinstance(item, kind)]


def test_distribution_boxes_and_outliers() -> None:
    render = render_distribution(build_vehicle_df(), LAYOUT)
    assert render.scene == Scene.DISTRIBUTION
    boxes = of_type(render, Rect)
    assert len(boxes) == 2
    assert all(box.height >= 0 for box in boxes)
    # three bands over 840px: step 280, bandwidth 112, offset 84
    assert boxes[0].x == pytest.approx(84.0)
    assert boxes[0].width == pytest.approx(112.0)
    outliers = of_type(render, PointMarker)
    assert len(outliers) == 1
    assert outliers[0].x == pytest.approx(140.0)


def test_distribution_axes() -> None:
    render = render_distribution(build_vehicle_df(), LAYOUT)
    bottom, left = render.axes
    assert [tick.label for tick in bottom.ticks] == ["2000"]
    assert bottom.offset == LAYOUT.inner_height
    labels = [tick.label for tick in left.ticks]
    assert labels[0] == "20" and labels[-1] == "40"


def test_distribution_hover_uses_band_hit_testing() -> None:
    render = render_distribution(build_vehicle_df(), LAYOUT)
    hit = render.inspect(100.0, 200.0)
    assert hit is not None
    assert hit.title == "Year: 2000"
    assert isinstance(hit.payload, BoxPlotSummary)
    assert hit.lines[0] == "Median: 22.5 MPG"
    assert render.inspect(10.0, 200.0) is None  # padding gap
    assert render.inspect(660.0, 200.0) is None  # 2002 has no finite values
    assert render.inspect(100.0, 500.0) is None


def test_cylinder_trend_lines_and_legend() -> None:
    render = render_cylinder_trend(build_cylinder_df(), LAYOUT)
    labels = [entry.label for entry in render.legend]
    assert labels[0].startswith("Overall (R² = ")
    assert "4-Cylinder (R² = 1.000)" in labels
    assert not any(label.startswith("8-Cylinder") for label in labels)

    lines = of_type(render, Polyline)
    dashed = [line for line in lines if line.style.dash]
    assert len(dashed) == len(render.legend) == 3
    assert [x for x, _ in dashed[1].points] == pytest.approx([0.0, 840.0])
    data_line = lines[2]
    assert [x for x, _ in data_line.points] == pytest.approx([0.0, 420.0, 840.0])


def test_cylinder_trend_hover_finds_nearest_year() -> None:
    render = render_cylinder_trend(build_cylinder_df(), LAYOUT)
    hit = render.inspect(400.0, 100.0)
    assert hit is not None
    assert hit.title == "Year: 2001"
    assert "4-Cylinder: 22.0 MPG" in hit.lines
    assert not any(line.startswith("6-Cylinder") for line in hit.lines)
    assert render.inspect(-5.0, 100.0) is None
    assert render.inspect(845.0, 100.0) is None


def test_emissions_trend_uses_fixed_domain() -> None:
    df = pd.DataFrame({"year": [2000, 2010], "avg_co2_gpm_overall": [500.0, 400.0]})
    render = render_emissions_trend(df, LAYOUT)
    left = render.axes[1]
    assert left.ticks[0].label == "300"
    assert left.ticks[-1].label == "700"
    hit = render.inspect(840.0, 10.0)
    assert hit.title == "Year: 2010"
    assert hit.lines == ("Overall: 400 g/mi",)


def test_guzzler_bars_diverge_from_zero() -> None:
    render = render_guzzler_trend(build_guzzler_df(), LAYOUT)
    bars = of_type(render, Rect)
    assert len(bars) == 3
    gain, drop, small_gain = bars
    zero = LAYOUT.inner_height / 2
    assert gain.style.fill == "#d62728"
    assert drop.style.fill == "#1f77b4"
    assert drop.y == pytest.approx(zero)
    assert gain.y + gain.height == pytest.approx(zero)
    assert small_gain.height == pytest.approx(gain.height / 2)

    percentage_line = of_type(render, Polyline)[-1]
    assert len(percentage_line.points) == 2
    assert [axis.orient for axis in render.axes] == ["bottom", "left", "right"]


def test_guzzler_hover() -> None:
    render = render_guzzler_trend(build_guzzler_df(), LAYOUT)
    # three bands: step 280, padding 0.3 -> band starts at 42 within each slot
    hit = render.inspect(50.0, 100.0)
    assert hit.title == "Year: 2001"
    assert hit.lines == ("Guzzler Pct: 6.0%", "Change: 1.00 pts")
    last = render.inspect(2 * 280 + 50.0, 100.0)
    assert last.lines == ("Guzzler Pct: N/A", "Change: 0.50 pts")
    assert render.inspect(5.0, 100.0) is None


@pytest.mark.parametrize("scene", list(Scene))
def test_empty_tables_render_without_data(scene) -> None:
    render = render_scene(scene, pd.DataFrame(), LAYOUT)
    assert render.scene == scene
    assert render.instructions == ()
    assert render.inspect(10.0, 10.0) is None
