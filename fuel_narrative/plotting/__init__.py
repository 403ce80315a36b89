"""Scene render passes producing pixel-space drawing instructions."""

from .instructions import Axis, Inspection, LegendEntry, PointMarker, Polyline, Rect, SceneRender, Style, Tick  # noqa: F401
from .scenes import BandInspector, NearestInspector, render_scene  # noqa: F401
