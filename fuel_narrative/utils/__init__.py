"""Shared helpers for the fuel narrative package."""

from .logging import configure_logging, get_logger  # noqa: F401
