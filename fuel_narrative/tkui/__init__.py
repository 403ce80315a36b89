"""Tkinter-based user interface for the fuel economy narrative."""
from __future__ import annotations

from .app import TkNarrativeApp, main
from .canvas import NarrativeCanvas

__all__ = [
    "TkNarrativeApp",
    "main",
    "NarrativeCanvas",
]
