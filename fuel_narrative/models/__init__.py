"""Data and state models for the fuel narrative."""

from .dataset import NarrativeData, Record, frame_records  # noqa: F401
from .scenes import InvalidSceneError, Scene, SceneCoordinator, SceneState  # noqa: F401
