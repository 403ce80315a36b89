"""Application entry point for the fuel economy narrative (Tkinter)."""
from __future__ import annotations

from fuel_narrative.tkui.app import main


if __name__ == "__main__":
    main()
