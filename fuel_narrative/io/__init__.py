"""Input helpers for loading the fuel-economy tables."""

from .loader import auto_type, load_narrative_data, load_table  # noqa: F401
