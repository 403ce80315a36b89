"""Interactive statistical narrative over EPA fuel-economy data."""

__version__ = "0.1.0"
