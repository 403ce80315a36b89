"""Tkinter front-end for the fuel economy narrative."""
from __future__ import annotations

import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox, ttk
from typing import Dict, List, Optional, Tuple

import pandas as pd

from fuel_narrative.config import AppConfig
from fuel_narrative.io.loader import load_narrative_data
from fuel_narrative.models.dataset import NarrativeData
from fuel_narrative.models.scenes import Scene, SceneCoordinator, SceneState
from fuel_narrative.plotting.instructions import SceneRender
from fuel_narrative.tkui.canvas import NarrativeCanvas
from fuel_narrative.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

LOAD_ERRORS = (OSError, ValueError, pd.errors.ParserError)


def legend_rows(render: SceneRender) -> List[Tuple[str, str]]:
    """Legend lines as ``(text, color)`` pairs, one per line class."""

    return [(f"■ {entry.label}", entry.color) for entry in render.legend]


class TkNarrativeApp:
    """Main window: scene buttons, annotation panel, chart and tooltip."""

    def __init__(self, root: tk.Tk, config: Optional[AppConfig] = None, data: Optional[NarrativeData] = None):
        self.root = root
        self.root.title("Fuel Economy Narrative")
        self.config = config or AppConfig()
        self.coordinator = SceneCoordinator(data or NarrativeData(), layout=self.config.layout)
        self.coordinator.subscribe(self._on_scene_changed)
        self.scene_buttons: Dict[Scene, ttk.Button] = {}

        self._build_menu()
        self._build_ui()
        self.coordinator.go_to(Scene.DISTRIBUTION)

    # ------------------------------------------------------------------ UI setup
    def _build_menu(self) -> None:
        menubar = tk.Menu(self.root)
        menu_file = tk.Menu(menubar, tearoff=0)
        menu_file.add_command(label="Open Data Folder…", command=self._choose_data_dir)
        menu_file.add_separator()
        menu_file.add_command(label="Exit", command=self.root.quit)
        menubar.add_cascade(label="File", menu=menu_file)
        self.root.config(menu=menubar)

    def _build_ui(self) -> None:
        controls = ttk.Frame(self.root)
        controls.pack(side="top", fill="x", padx=6, pady=6)

        ttk.Button(controls, text="◀ Prev", command=self.coordinator.prev).pack(side="left", padx=2)
        for scene in Scene:
            button = ttk.Button(
                controls,
                text=f"{scene.value}. {scene.label}",
                command=lambda s=scene: self.coordinator.go_to(s.value),
            )
            button.pack(side="left", padx=2)
            self.scene_buttons[scene] = button
        ttk.Button(controls, text="Next ▶", command=self.coordinator.next).pack(side="left", padx=2)

        body = ttk.Frame(self.root)
        body.pack(side="top", fill="both", expand=True)

        annotation_box = ttk.LabelFrame(body, text="About this view")
        annotation_box.pack(side="left", fill="y", padx=6, pady=6)
        self.annotation = ttk.Label(annotation_box, justify="left", wraplength=280, anchor="nw")
        self.annotation.pack(fill="x", padx=6, pady=6)
        self.legend_box = ttk.Frame(annotation_box)
        self.legend_box.pack(fill="x", padx=6, pady=(0, 6))

        chart_box = ttk.Frame(body)
        chart_box.pack(side="left", fill="both", expand=True, padx=6, pady=6)
        self.chart = NarrativeCanvas(chart_box, layout=self.config.layout)
        self.chart.widget.pack(fill="both", expand=True)

        self.tooltip = tk.Label(
            chart_box, justify="left", background="#ffffe0", relief="solid", borderwidth=1, padx=4, pady=2
        )

        self.root.bind("<Left>", lambda _event: self.coordinator.prev())
        self.root.bind("<Right>", lambda _event: self.coordinator.next())
        self.root.minsize(self.config.layout.width + 320, self.config.layout.height + 60)

    # ------------------------------------------------------------------ data IO
    def load_data(self, data_dir: Path) -> bool:
        """Load the tables from ``data_dir`` and redraw the current scene."""

        try:
            data = load_narrative_data(data_dir, self.config.sources)
        except LOAD_ERRORS as exc:
            logger.exception("Failed to load data from %s", data_dir)
            messagebox.showwarning("Load data", f"Failed to load data from {data_dir}\n{exc}")
            return False
        self.coordinator.data = data
        self.coordinator.go_to(self.coordinator.current.value)
        return True

    def _choose_data_dir(self) -> None:
        path = filedialog.askdirectory(title="Select the folder holding the fuel economy CSVs")
        if path:
            self.load_data(Path(path))

    # ------------------------------------------------------------------ callbacks
    def _on_scene_changed(self, state: SceneState, render: SceneRender) -> None:
        # Rebind the pointer within the scene switch so no event reaches the old scene.
        self.chart.unbind_pointer()
        self._hide_tooltip()
        self._set_annotation(render)
        for scene, button in self.scene_buttons.items():
            button.state(["pressed"] if scene == state.scene else ["!pressed"])
        self.chart.draw(render)
        generation = state.generation
        self.chart.bind_pointer(
            lambda x, y, wx, wy: self._on_pointer(generation, x, y, wx, wy),
            self._hide_tooltip,
        )

    def _set_annotation(self, render: SceneRender) -> None:
        self.annotation.configure(text="\n\n".join([render.title, *render.paragraphs]))
        for child in self.legend_box.winfo_children():
            child.destroy()
        for text, color in legend_rows(render):
            ttk.Label(self.legend_box, text=text, foreground=color, anchor="w").pack(fill="x")

    def _on_pointer(self, generation: int, x: float, y: float, widget_x: int, widget_y: int) -> None:
        inspection = self.coordinator.inspect(generation, x, y)
        if inspection is None:
            self._hide_tooltip()
            return
        self.tooltip.configure(text="\n".join([inspection.title, *inspection.lines]))
        self.tooltip.place(x=widget_x + 15, y=max(widget_y - 28, 0))
        self.tooltip.lift()

    def _hide_tooltip(self) -> None:
        self.tooltip.place_forget()


def main() -> None:
    """Launch the Tk narrative with settings from the environment."""

    config = AppConfig.from_env()
    configure_logging(config.log_level)
    root = tk.Tk()
    app = TkNarrativeApp(root, config=config)
    app.load_data(config.data_dir)
    root.mainloop()
