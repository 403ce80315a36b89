"""Pixel-space drawing instructions handed to the drawing collaborator.

Coordinates are relative to the inner plot area: ``x`` grows to the right
from 0 to ``inner_width`` and ``y`` grows downward from 0 to ``inner_height``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple, Union

from fuel_narrative.models.scenes import Scene

Point = Tuple[float, float]


@dataclass(frozen=True)
class Style:
    stroke: Optional[str] = None
    fill: Optional[str] = None
    line_width: float = 1.0
    alpha: float = 1.0
    dash: Optional[Tuple[float, ...]] = None


@dataclass(frozen=True)
class Polyline:
    points: Tuple[Point, ...]
    style: Style = Style(stroke="#000000")


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    style: Style = Style(fill="#000000")


@dataclass(frozen=True)
class PointMarker:
    x: float
    y: float
    radius: float = 2.0
    style: Style = Style(fill="#000000")


Instruction = Union[Polyline, Rect, PointMarker]


@dataclass(frozen=True)
class Tick:
    position: float
    label: str


@dataclass(frozen=True)
class Axis:
    """An axis line with its ticks.

    ``orient`` is ``"bottom"``, ``"left"`` or ``"right"``; ``offset`` is the
    pixel coordinate of the axis line across its orientation (the ``y`` of a
    bottom axis, the ``x`` of a vertical one).
    """

    orient: str
    offset: float
    ticks: Tuple[Tick, ...]
    label: str = ""


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: str


@dataclass(frozen=True)
class Inspection:
    """Content of a hover overlay.

    ``payload`` is the ``BoxPlotSummary`` or record the lines describe.
    """

    title: str
    lines: Tuple[str, ...]
    payload: Any = None


class Inspector(Protocol):
    def inspect(self, x: float, y: float) -> Optional[Inspection]:
        ...


@dataclass(frozen=True)
class SceneRender:
    """Everything the drawing collaborator needs to paint one scene."""

    scene: Scene
    title: str
    paragraphs: Tuple[str, ...]
    axes: Tuple[Axis, ...] = ()
    instructions: Tuple[Instruction, ...] = ()
    legend: Tuple[LegendEntry, ...] = ()
    inspector: Optional[Inspector] = None

    def inspect(self, x: float, y: float) -> Optional[Inspection]:
        if self.inspector is None:
            return None
        return self.inspector.inspect(x, y)
