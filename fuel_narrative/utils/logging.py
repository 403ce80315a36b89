"""
Logging helpers for the fuel narrative package.

Library modules only ever call ``get_logger(__name__)``. The entry points
(``app.py`` and ``python -m fuel_narrative``) call ``configure_logging()``
once to attach a stderr handler to the ``fuel_narrative`` logger. The root
logger is never touched, so an embedding application keeps control of its
own handlers.

Example
-------
    from fuel_narrative.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("Loaded %d rows", len(df))
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "fuel_narrative"
LOG_LEVEL_ENV = "FUEL_NARRATIVE_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure the ``fuel_narrative`` logger (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the
        ``FUEL_NARRATIVE_LOG_LEVEL`` env var, or "INFO" if unset.
    fmt:
        Log message format.
    datefmt:
        Date format for ``%(asctime)s``.
    force:
        If True, drop existing handlers before adding the new one. If False,
        an already configured stderr handler is left in place.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
    else:
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler) and handler.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``logging.getLogger(name)``, defaulting to the package logger."""
    return logging.getLogger(name or PACKAGE_LOGGER)
