"""Render passes for the four scenes and their hover inspectors."""
from __future__ import annotations

import math
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from fuel_narrative.analysis.boxplot import BoxPlotSummary, group_and_summarize
from fuel_narrative.analysis.nearest import NearestPointIndex
from fuel_narrative.analysis.scales import BandScale, LinearScale
from fuel_narrative.analysis.trendlines import fit_series
from fuel_narrative.config import LayoutConfig
from fuel_narrative.models.dataset import Record, frame_records
from fuel_narrative.models.scenes import Scene
from fuel_narrative.plotting.instructions import (
    Axis,
    Inspection,
    Instruction,
    LegendEntry,
    PointMarker,
    Polyline,
    Rect,
    SceneRender,
    Style,
    Tick,
)
from fuel_narrative.plotting.narrative import CO2_CLASSES, CYLINDER_CLASSES, SCENE_TEXT, LineClass
from fuel_narrative.utils.logging import get_logger

logger = get_logger(__name__)

OUTLIER_STYLE = Style(fill="#6c757d", alpha=0.5)
WHISKER_STYLE = Style(stroke="#343a40", line_width=1.5)
BOX_STYLE = Style(stroke="#1f77b4", fill="#1f77b4", alpha=0.7, line_width=1.5)
MEDIAN_STYLE = Style(stroke="#ffffff", line_width=2.0)
ZERO_RULE_STYLE = Style(stroke="#343a40", line_width=1.0)
GAIN_BAR_STYLE = Style(fill="#d62728", alpha=0.7)
DROP_BAR_STYLE = Style(fill="#1f77b4", alpha=0.7)
GUZZLER_LINE_STYLE = Style(stroke="#000000", line_width=2.5)


# --------------------------------------------------------------------- helpers
def _numeric(frame: pd.DataFrame, column: str) -> pd.Series:
    if column not in frame.columns:
        return pd.Series(np.nan, index=frame.index, dtype=float)
    return pd.to_numeric(frame[column], errors="coerce").astype(float)


def _finite_extent(values: pd.Series) -> Optional[Tuple[float, float]]:
    finite = values[np.isfinite(values)]
    if finite.empty:
        return None
    return float(finite.min()), float(finite.max())


def _format_tick(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _linear_axis(orient: str, offset: float, scale: LinearScale, label: str = "") -> Axis:
    ticks = tuple(Tick(scale.map(v), _format_tick(v)) for v in scale.ticks())
    return Axis(orient=orient, offset=offset, ticks=ticks, label=label)


def _year_band_axis(offset: float, scale: BandScale) -> Axis:
    ticks = tuple(Tick(scale.center(year), str(year)) for year in scale.domain if int(year) % 5 == 0)
    return Axis(orient="bottom", offset=offset, ticks=ticks)


def _base_render(scene: Scene, **kwargs) -> SceneRender:
    title, paragraphs = SCENE_TEXT[scene]
    return SceneRender(scene=scene, title=title, paragraphs=paragraphs, **kwargs)


def _in_plot_area(x: float, y: float, width: float, height: float) -> bool:
    return 0 <= x <= width and 0 <= y <= height


# ------------------------------------------------------------------ inspectors
class BandInspector:
    """Hit-tests the pointer against category bands."""

    def __init__(
        self,
        scale: BandScale,
        lookup: Callable[[Hashable], Optional[Inspection]],
        height: float,
    ) -> None:
        self.scale = scale
        self.lookup = lookup
        self.height = height

    def inspect(self, x: float, y: float) -> Optional[Inspection]:
        if not 0 <= y <= self.height:
            return None
        key = self.scale.key_at(x)
        if key is None:
            return None
        return self.lookup(key)


class NearestInspector:
    """Reports the record nearest the pointer along a continuous x axis."""

    def __init__(
        self,
        scale: LinearScale,
        index: NearestPointIndex,
        describe: Callable[[Record], Inspection],
        width: float,
        height: float,
    ) -> None:
        self.scale = scale
        self.index = index
        self.describe = describe
        self.width = width
        self.height = height

    def inspect(self, x: float, y: float) -> Optional[Inspection]:
        if not _in_plot_area(x, y, self.width, self.height):
            return None
        record = self.index.nearest(self.scale.invert(x))
        if record is None:
            return None
        return self.describe(record)


# ---------------------------------------------------------- scene 1: box plots
def describe_summary(year: Hashable, summary: BoxPlotSummary) -> Inspection:
    lines = (
        f"Median: {summary.median:.1f} MPG",
        f"IQR: {summary.iqr:.1f}",
        f"Range: {summary.q1:.1f}–{summary.q3:.1f}",
    )
    return Inspection(title=f"Year: {year}", lines=lines, payload=summary)


def _box_instructions(center: float, start: float, bandwidth: float, s: BoxPlotSummary, y: LinearScale) -> List[Instruction]:
    half = bandwidth / 2
    items: List[Instruction] = [PointMarker(center, y.map(v), 2.0, OUTLIER_STYLE) for v in s.outliers]
    low, high = y.map(s.whisker_min), y.map(s.whisker_max)
    items.append(Polyline(((center, low), (center, high)), WHISKER_STYLE))
    items.append(Polyline(((center - half, low), (center + half, low)), WHISKER_STYLE))
    items.append(Polyline(((center - half, high), (center + half, high)), WHISKER_STYLE))
    top = y.map(s.q3)
    items.append(Rect(start, top, bandwidth, y.map(s.q1) - top, BOX_STYLE))
    mid = y.map(s.median)
    items.append(Polyline(((start, mid), (start + bandwidth, mid)), MEDIAN_STYLE))
    return items


def render_distribution(frame: pd.DataFrame, layout: LayoutConfig, value_col: str = "combMPG") -> SceneRender:
    """Box plot of ``value_col`` per model year."""

    width, height = layout.inner_width, layout.inner_height
    table = frame.assign(year=_numeric(frame, "year"), value=_numeric(frame, value_col))
    table = table.dropna(subset=["year"]).astype({"year": int})
    extent = _finite_extent(table["value"])
    if table.empty or extent is None:
        logger.info("Distribution scene has no plottable rows")
        return _base_render(Scene.DISTRIBUTION)

    x = BandScale(tuple(range(int(table["year"].min()), int(table["year"].max()) + 1)), (0, width), padding=0.6)
    y = LinearScale(extent, (height, 0)).nice()

    summaries: Dict[Hashable, BoxPlotSummary] = {}
    instructions: List[Instruction] = []
    for year, summary in group_and_summarize(table, "year", "value").items():
        if year not in x:
            logger.debug("Year %r is outside the band domain; skipping", year)
            continue
        summaries[year] = summary
        instructions.extend(_box_instructions(x.center(year), x.map(year), x.bandwidth, summary, y))

    def lookup(year: Hashable) -> Optional[Inspection]:
        summary = summaries.get(year)
        return describe_summary(year, summary) if summary is not None else None

    return _base_render(
        Scene.DISTRIBUTION,
        axes=(_year_band_axis(height, x), _linear_axis("left", 0, y, "Combined MPG")),
        instructions=tuple(instructions),
        inspector=BandInspector(x, lookup, height),
    )


# -------------------------------------------------------- scenes 2, 3: trends
def _describe_trend(classes: Sequence[LineClass], fmt: str, unit: str) -> Callable[[Record], Inspection]:
    def describe(record: Record) -> Inspection:
        lines = []
        for line in classes:
            value = record.get(line.key)
            if value is not None and math.isfinite(float(value)):
                lines.append(f"{line.name}: {float(value):{fmt}} {unit}")
        return Inspection(title=f"Year: {int(record['year'])}", lines=tuple(lines), payload=record)

    return describe


def _render_trend(
    scene: Scene,
    frame: pd.DataFrame,
    layout: LayoutConfig,
    classes: Sequence[LineClass],
    y_domain: Tuple[float, float],
    describe: Callable[[Record], Inspection],
    y_label: str,
) -> SceneRender:
    width, height = layout.inner_width, layout.inner_height
    ordered = frame.assign(year=_numeric(frame, "year")).dropna(subset=["year"])
    ordered = ordered.sort_values("year", kind="mergesort")
    if ordered.empty:
        logger.info("%s scene has no rows with a year", scene.label)
        return _base_render(scene)

    x = LinearScale((ordered["year"].min(), ordered["year"].max()), (0, width))
    y = LinearScale(y_domain, (height, 0))
    x1, x2 = x.domain

    instructions: List[Instruction] = []
    legend: List[LegendEntry] = []
    for line in classes:
        values = _numeric(ordered, line.key)
        line_data = ordered[np.isfinite(values)]
        if line_data.empty:
            logger.debug("No finite %s values; skipping %s", line.key, line.name)
            continue
        points = tuple(
            (x.map(year), y.map(v)) for year, v in zip(line_data["year"], values[np.isfinite(values)])
        )
        instructions.append(Polyline(points, Style(stroke=line.color, line_width=2.5)))

        fit = fit_series(line_data, "year", line.key)
        segment = tuple((x.map(px), y.map(py)) for px, py in fit.segment(x1, x2))
        instructions.append(
            Polyline(segment, Style(stroke=line.color, line_width=1.5, alpha=0.6, dash=(3.0, 3.0)))
        )
        legend.append(LegendEntry(f"{line.name} (R² = {fit.r2:.3f})", line.color))

    index = NearestPointIndex(frame_records(ordered))
    return _base_render(
        scene,
        axes=(_linear_axis("bottom", height, x), _linear_axis("left", 0, y, y_label)),
        instructions=tuple(instructions),
        legend=tuple(legend),
        inspector=NearestInspector(x, index, describe, width, height),
    )


def render_cylinder_trend(frame: pd.DataFrame, layout: LayoutConfig) -> SceneRender:
    """Average combined MPG per cylinder class with least-squares overlays."""

    y_max = _numeric(frame, "avg_mpg_4cyl").max()
    if not np.isfinite(y_max):
        extents = [_finite_extent(_numeric(frame, line.key)) for line in CYLINDER_CLASSES]
        y_max = max((hi for _, hi in filter(None, extents)), default=1.0)
    y_domain = LinearScale((0.0, float(y_max)), (0, 1)).nice().domain
    return _render_trend(
        Scene.CYLINDER_TREND,
        frame,
        layout,
        CYLINDER_CLASSES,
        y_domain,
        _describe_trend(CYLINDER_CLASSES, ".1f", "MPG"),
        "Combined MPG",
    )


def render_emissions_trend(frame: pd.DataFrame, layout: LayoutConfig) -> SceneRender:
    """Average CO₂ grams/mile per cylinder class with least-squares overlays."""

    return _render_trend(
        Scene.EMISSIONS_TREND,
        frame,
        layout,
        CO2_CLASSES,
        (300.0, 700.0),
        _describe_trend(CO2_CLASSES, ".0f", "g/mi"),
        "CO₂ (g/mi)",
    )


# ------------------------------------------------------ scene 4: guzzler combo
def describe_guzzler(record: Record) -> Inspection:
    pct = record.get("guzzler_percentage")
    change = record.get("yoy_change")
    pct_text = f"Guzzler Pct: {float(pct):.1f}%" if pct is not None and math.isfinite(float(pct)) else "Guzzler Pct: N/A"
    if change is not None and math.isfinite(float(change)):
        change_text = f"Change: {float(change):.2f} pts"
    else:
        change_text = "Change: N/A"
    return Inspection(title=f"Year: {int(record['year'])}", lines=(pct_text, change_text), payload=record)


def render_guzzler_trend(frame: pd.DataFrame, layout: LayoutConfig) -> SceneRender:
    """Diverging year-over-year bars with the absolute guzzler share as a line."""

    width, height = layout.inner_width, layout.inner_height
    table = frame.assign(
        year=_numeric(frame, "year"),
        yoy_change=_numeric(frame, "yoy_change"),
        guzzler_percentage=_numeric(frame, "guzzler_percentage"),
    ).dropna(subset=["year"])
    yoy = table[np.isfinite(table["yoy_change"])]
    if yoy.empty:
        logger.info("Guzzler scene has no finite year-over-year changes")
        return _base_render(Scene.GUZZLER_TREND)

    x = BandScale(tuple(int(v) for v in yoy["year"]), (0, width), padding=0.3)
    yoy_max = float(yoy["yoy_change"].abs().max())
    y_change = LinearScale((-yoy_max, yoy_max), (height, 0)).nice()
    y_percent = LinearScale((0.0, 15.0), (height, 0))
    zero = y_change.map(0.0)

    instructions: List[Instruction] = []
    for year, change in zip(yoy["year"], yoy["yoy_change"]):
        top = y_change.map(change) if change >= 0 else zero
        style = GAIN_BAR_STYLE if change >= 0 else DROP_BAR_STYLE
        instructions.append(Rect(x.map(int(year)), top, x.bandwidth, abs(zero - y_change.map(change)), style))
    instructions.append(Polyline(((0.0, zero), (float(width), zero)), ZERO_RULE_STYLE))

    on_axis = table[table["year"].map(lambda v: int(v) in x) & np.isfinite(table["guzzler_percentage"])]
    points = tuple(
        (x.center(int(year)), y_percent.map(pct)) for year, pct in zip(on_axis["year"], on_axis["guzzler_percentage"])
    )
    if points:
        instructions.append(Polyline(points, GUZZLER_LINE_STYLE))

    by_year: Dict[int, Record] = {}
    for record in frame_records(table):
        by_year.setdefault(int(record["year"]), record)

    def lookup(year: Hashable) -> Optional[Inspection]:
        record = by_year.get(int(year))
        return describe_guzzler(record) if record is not None else None

    return _base_render(
        Scene.GUZZLER_TREND,
        axes=(
            _year_band_axis(height, x),
            _linear_axis("left", 0, y_change, "YoY Change (pts)"),
            _linear_axis("right", width, y_percent, "Absolute Guzzler (%)"),
        ),
        instructions=tuple(instructions),
        legend=(
            LegendEntry("YoY increase", GAIN_BAR_STYLE.fill),
            LegendEntry("YoY decrease", DROP_BAR_STYLE.fill),
            LegendEntry("Absolute guzzler share", GUZZLER_LINE_STYLE.stroke),
        ),
        inspector=BandInspector(x, lookup, height),
    )


SCENE_RENDERERS: Dict[Scene, Callable[[pd.DataFrame, LayoutConfig], SceneRender]] = {
    Scene.DISTRIBUTION: render_distribution,
    Scene.CYLINDER_TREND: render_cylinder_trend,
    Scene.EMISSIONS_TREND: render_emissions_trend,
    Scene.GUZZLER_TREND: render_guzzler_trend,
}


def render_scene(scene: Scene, frame: pd.DataFrame, layout: Optional[LayoutConfig] = None) -> SceneRender:
    """Run the render pass for ``scene`` over ``frame``."""

    return SCENE_RENDERERS[Scene(scene)](frame, layout or LayoutConfig())
