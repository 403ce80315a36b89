"""Scene selection state machine."""
from __future__ import annotations

import numbers
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Callable, List, Optional

import pandas as pd

from fuel_narrative.config import LayoutConfig
from fuel_narrative.models.dataset import NarrativeData
from fuel_narrative.utils.logging import get_logger

if TYPE_CHECKING:
    from fuel_narrative.plotting.instructions import Inspection, SceneRender

logger = get_logger(__name__)


class InvalidSceneError(ValueError):
    """Raised for a navigation target outside the numbered scenes."""


class Scene(IntEnum):
    DISTRIBUTION = 1
    CYLINDER_TREND = 2
    EMISSIONS_TREND = 3
    GUZZLER_TREND = 4

    @property
    def dataset(self) -> str:
        """Name of the ``NarrativeData`` table this scene draws."""

        return _SCENE_DATASETS[self]

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


_SCENE_DATASETS = {
    Scene.DISTRIBUTION: "vehicle",
    Scene.CYLINDER_TREND: "cylinder",
    Scene.EMISSIONS_TREND: "co2",
    Scene.GUZZLER_TREND: "guzzler",
}


@dataclass(frozen=True)
class SceneState:
    """The active scene and a counter bumped on every transition."""

    scene: Scene
    generation: int


Renderer = Callable[[Scene, pd.DataFrame, LayoutConfig], "SceneRender"]
Subscriber = Callable[[SceneState, "SceneRender"], None]


def _default_renderer(scene: Scene, frame: pd.DataFrame, layout: LayoutConfig) -> "SceneRender":
    # Imported here because the render passes depend on Scene.
    from fuel_narrative.plotting.scenes import render_scene

    return render_scene(scene, frame, layout)


class SceneCoordinator:
    """Owns the active scene and hands each render pass its dataset.

    Every transition, including a jump to the scene already shown, replaces
    the state and the render description wholesale and then notifies
    subscribers. Pointer queries carry the generation they were bound under,
    so a query from a torn-down scene is answered with ``None``.
    """

    def __init__(
        self,
        data: NarrativeData,
        layout: Optional[LayoutConfig] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.data = data
        self.layout = layout or LayoutConfig()
        self._renderer = renderer or _default_renderer
        self._subscribers: List[Subscriber] = []
        self._state = SceneState(Scene.DISTRIBUTION, 0)
        self._render: Optional["SceneRender"] = None

    # ------------------------------------------------------------------ state
    @property
    def state(self) -> SceneState:
        return self._state

    @property
    def current(self) -> Scene:
        return self._state.scene

    def active_dataset(self) -> pd.DataFrame:
        return self.data.table(self._state.scene.dataset)

    def render(self) -> "SceneRender":
        """Return the render description of the active scene."""

        if self._render is None:
            self._render = self._renderer(self.current, self.active_dataset(), self.layout)
        return self._render

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback(state, render)`` after each transition; returns an unsubscriber."""

        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------ transitions
    def go_to(self, scene_id: int) -> SceneState:
        if isinstance(scene_id, bool) or not isinstance(scene_id, numbers.Integral):
            logger.warning("Rejected scene id %r", scene_id)
            raise InvalidSceneError(f"Scene id must be an integer, got {scene_id!r}")
        if not 1 <= int(scene_id) <= len(Scene):
            logger.warning("Rejected scene id %r", scene_id)
            raise InvalidSceneError(f"Scene id must be between 1 and {len(Scene)}, got {scene_id}")
        return self._transition(Scene(int(scene_id)))

    def next(self) -> SceneState:
        return self._transition(Scene(self.current % len(Scene) + 1))

    def prev(self) -> SceneState:
        previous = len(Scene) if self.current == Scene.DISTRIBUTION else self.current - 1
        return self._transition(Scene(previous))

    def _transition(self, scene: Scene) -> SceneState:
        state = SceneState(scene, self._state.generation + 1)
        render = self._renderer(scene, self.data.table(scene.dataset), self.layout)
        self._state, self._render = state, render
        logger.debug("Scene %d (%s), generation %d", scene.value, scene.label, state.generation)
        for callback in list(self._subscribers):
            callback(state, render)
        return state

    # ------------------------------------------------------------- inspection
    def inspect(self, generation: int, x: float, y: float) -> Optional["Inspection"]:
        """Answer a pointer query at plot-area pixel ``(x, y)``.

        Queries bound to an earlier generation are ignored.
        """

        if generation != self._state.generation:
            return None
        return self.render().inspect(x, y)
