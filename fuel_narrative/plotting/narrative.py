"""Annotation text and line-class definitions for each scene."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from fuel_narrative.models.scenes import Scene


@dataclass(frozen=True)
class LineClass:
    name: str
    key: str
    color: str


CYLINDER_CLASSES: Tuple[LineClass, ...] = (
    LineClass("Overall", "avg_comb_mpg_overall", "#343a40"),
    LineClass("4-Cylinder", "avg_mpg_4cyl", "#2ca02c"),
    LineClass("6-Cylinder", "avg_mpg_6cyl", "#ff7f0e"),
    LineClass("8-Cylinder", "avg_mpg_8cyl", "#d62728"),
)

CO2_CLASSES: Tuple[LineClass, ...] = (
    LineClass("Overall", "avg_co2_gpm_overall", "#343a40"),
    LineClass("4-Cylinder", "avg_co2_4cyl", "#2ca02c"),
    LineClass("6-Cylinder", "avg_co2_6cyl", "#ff7f0e"),
    LineClass("8-Cylinder", "avg_co2_8cyl", "#d62728"),
)

HOVER_HINT = "Mouse over the data in each year to see the detailed numbers for that model year."

SCENE_TEXT: Dict[Scene, Tuple[str, Tuple[str, ...]]] = {
    Scene.DISTRIBUTION: (
        "MPG (Miles Per Gallon) Distribution by Year",
        (
            "According to EPA test data, fuel economy for gasoline-powered "
            "internal-combustion-engine (gas ICE) vehicles has improved over the past ~40 years.",
            HOVER_HINT,
            "Each box covers the middle 50% of combined MPG ratings for a model year "
            "(the interquartile range). The white line marks the median: about half of "
            "the tested vehicles that year rated higher and half rated lower.",
        ),
    ),
    Scene.CYLINDER_TREND: (
        "Combined MPG Trend by Cylinder Class",
        (
            "Fuel economy for the three largest classes of gas ICE vehicles "
            "(4-, 6- and 8-cylinder) has improved over the past ~40 years.",
            HOVER_HINT,
            "4-cylinder vehicles remain the most efficient class, but 6- and 8-cylinder "
            "vehicles have improved as well. The dashed lines are least-squares fits; "
            "their R² values show how linear the improvement has been.",
        ),
    ),
    Scene.EMISSIONS_TREND: (
        "CO₂ Emissions Trend by Cylinder Class",
        (
            "The EPA also measures CO₂ tailpipe emissions, which have fallen alongside "
            "the MPG gains. Engine start-stop and cylinder deactivation contributed.",
            HOVER_HINT,
            "Of the three largest cylinder classes, 8-cylinder engines show the greatest "
            "reduction in CO₂ emissions. The dashed lines are least-squares fits.",
        ),
    ),
    Scene.GUZZLER_TREND: (
        "Gas Guzzler Trends",
        (
            "Cars that miss US fuel economy standards are taxed at the manufacturer or "
            "importer. Gas guzzlers have stayed under 10% of tested vehicles per model "
            "year, peaking in the early 1990s and the mid 2000s.",
            HOVER_HINT,
            "Red and blue bars show the year-over-year change in guzzler share (left "
            "axis); the black line shows the absolute percentage (right axis).",
        ),
    ),
}
