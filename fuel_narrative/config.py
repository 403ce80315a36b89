"""Layout and data-source configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from fuel_narrative.utils.logging import LOG_LEVEL_ENV

DATA_DIR_ENV = "FUEL_NARRATIVE_DATA_DIR"


@dataclass(frozen=True)
class Margins:
    """Space reserved around the plot area for axes and labels, in pixels."""

    top: int = 40
    right: int = 60
    bottom: int = 50
    left: int = 60


@dataclass(frozen=True)
class LayoutConfig:
    """Size of the drawing surface.

    Attributes
    ----------
    width, height:
        Outer size of the surface in pixels.
    margins:
        Space kept free around the inner plot area.
    """

    width: int = 960
    height: int = 500
    margins: Margins = field(default_factory=Margins)

    @property
    def inner_width(self) -> int:
        return self.width - self.margins.left - self.margins.right

    @property
    def inner_height(self) -> int:
        return self.height - self.margins.top - self.margins.bottom


@dataclass(frozen=True)
class DataSources:
    """File names of the four tables the narrative is built from."""

    vehicle: str = "full_vehicle_data.csv"
    guzzler: str = "guzzler_trends.csv"
    cylinder: str = "cylinder_trends.csv"
    co2: str = "co2_trends.csv"

    def as_dict(self) -> Dict[str, str]:
        return {
            "vehicle": self.vehicle,
            "guzzler": self.guzzler,
            "cylinder": self.cylinder,
            "co2": self.co2,
        }


@dataclass(frozen=True)
class AppConfig:
    data_dir: Path = field(default_factory=Path.cwd)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    sources: DataSources = field(default_factory=DataSources)
    log_level: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "AppConfig":
        """Build a config from ``FUEL_NARRATIVE_*`` environment variables."""

        env = os.environ if environ is None else environ
        data_dir = env.get(DATA_DIR_ENV)
        return cls(
            data_dir=Path(data_dir) if data_dir else Path.cwd(),
            log_level=env.get(LOG_LEVEL_ENV) or None,
        )
