"""Paint scene render descriptions onto an embedded Matplotlib figure."""
from __future__ import annotations

import tkinter as tk
from typing import Any, Callable, Optional, Tuple

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Rectangle

from fuel_narrative.config import LayoutConfig
from fuel_narrative.plotting.instructions import Axis, Instruction, PointMarker, Polyline, Rect, SceneRender

TICK_SIZE = 6
AXIS_COLOR = "#000000"
FONT_SIZE = 8


def widget_position(event: Any, widget_height: int) -> Tuple[int, int]:
    """Pointer position of a Matplotlib event in Tk widget coordinates.

    Prefers the originating Tk event, which is already in widget units with y
    measured from the top. Otherwise flips Matplotlib's bottom-up y against the
    current widget height.
    """

    gui = getattr(event, "guiEvent", None)
    if gui is not None and hasattr(gui, "x") and hasattr(gui, "y"):
        return int(gui.x), int(gui.y)
    return int(event.x), int(widget_height - event.y)


class NarrativeCanvas:
    """Draws ``SceneRender`` instructions in pixel coordinates.

    The axes span the whole figure with limits chosen so one data unit equals
    one pixel and ``(0, 0)`` is the top-left corner of the inner plot area.
    """

    def __init__(self, master: tk.Misc, layout: Optional[LayoutConfig] = None, dpi: int = 100) -> None:
        self.layout = layout or LayoutConfig()
        self.figure = Figure(figsize=(self.layout.width / dpi, self.layout.height / dpi), dpi=dpi)
        self.canvas = FigureCanvasTkAgg(self.figure, master=master)
        self.widget = self.canvas.get_tk_widget()
        self.ax = self.figure.add_axes((0, 0, 1, 1))
        self._motion_cid: Optional[int] = None
        self._leave_cid: Optional[int] = None
        self._reset_axes()

    # ------------------------------------------------------------------ drawing
    def _reset_axes(self) -> None:
        margins = self.layout.margins
        self.ax.clear()
        self.ax.set_xlim(-margins.left, self.layout.width - margins.left)
        self.ax.set_ylim(self.layout.height - margins.top, -margins.top)
        self.ax.set_axis_off()

    def draw(self, render: SceneRender) -> None:
        """Clear the figure and paint ``render``."""

        self._reset_axes()
        for axis in render.axes:
            self._draw_axis(axis)
        for item in render.instructions:
            self._draw_instruction(item)
        self.canvas.draw_idle()

    def _draw_instruction(self, item: Instruction) -> None:
        style = item.style
        if isinstance(item, Polyline):
            if not item.points:
                return
            xs, ys = zip(*item.points)
            kwargs = {"color": style.stroke, "linewidth": style.line_width, "alpha": style.alpha}
            if style.dash:
                kwargs["dashes"] = style.dash
            self.ax.plot(xs, ys, **kwargs)
        elif isinstance(item, Rect):
            self.ax.add_patch(
                Rectangle(
                    (item.x, item.y),
                    item.width,
                    item.height,
                    facecolor=style.fill or "none",
                    edgecolor=style.stroke or "none",
                    linewidth=style.line_width if style.stroke else 0,
                    alpha=style.alpha,
                )
            )
        elif isinstance(item, PointMarker):
            self.ax.add_patch(
                Circle((item.x, item.y), item.radius, facecolor=style.fill, edgecolor="none", alpha=style.alpha)
            )

    def _draw_axis(self, axis: Axis) -> None:
        width, height = self.layout.inner_width, self.layout.inner_height
        text = {"fontsize": FONT_SIZE, "color": AXIS_COLOR}
        if axis.orient == "bottom":
            self.ax.plot([0, width], [axis.offset, axis.offset], color=AXIS_COLOR, linewidth=1)
            for tick in axis.ticks:
                self.ax.plot([tick.position] * 2, [axis.offset, axis.offset + TICK_SIZE], color=AXIS_COLOR, linewidth=1)
                self.ax.text(tick.position, axis.offset + TICK_SIZE + 2, tick.label, ha="center", va="top", **text)
            if axis.label:
                self.ax.text(width / 2, axis.offset + 30, axis.label, ha="center", va="top", **text)
            return

        sign = -1 if axis.orient == "left" else 1
        align = "right" if axis.orient == "left" else "left"
        self.ax.plot([axis.offset, axis.offset], [0, height], color=AXIS_COLOR, linewidth=1)
        for tick in axis.ticks:
            end = axis.offset + sign * TICK_SIZE
            self.ax.plot([axis.offset, end], [tick.position] * 2, color=AXIS_COLOR, linewidth=1)
            self.ax.text(end + sign * 2, tick.position, tick.label, ha=align, va="center", **text)
        if axis.label:
            self.ax.text(axis.offset, -20, axis.label, ha="left" if axis.orient == "left" else "right", **text)

    # ---------------------------------------------------------------- pointer
    def bind_pointer(
        self,
        on_move: Callable[[float, float, int, int], None],
        on_leave: Callable[[], None],
    ) -> None:
        """Route pointer motion as ``(plot_x, plot_y, widget_x, widget_y)``.

        Any previous binding is dropped first.
        """

        self.unbind_pointer()

        def _motion(event) -> None:
            if event.xdata is None or event.ydata is None:
                on_leave()
                return
            widget_x, widget_y = widget_position(event, self.widget.winfo_height())
            on_move(float(event.xdata), float(event.ydata), widget_x, widget_y)

        self._motion_cid = self.canvas.mpl_connect("motion_notify_event", _motion)
        self._leave_cid = self.canvas.mpl_connect("figure_leave_event", lambda _event: on_leave())

    def unbind_pointer(self) -> None:
        for cid in (self._motion_cid, self._leave_cid):
            if cid is not None:
                self.canvas.mpl_disconnect(cid)
        self._motion_cid = None
        self._leave_cid = None
