"""Logging setup for the CLI layer.

Modules log through ``logging.getLogger(__name__)``; only the CLI calls
:func:`configure_logging`.  Records go to stderr through Rich so that
stdout carries nothing but listing output.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from odo.cli.console import get_rich_console

ROOT_LOGGER = "odo"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a single stderr handler to the ``odo`` logger tree."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Remove existing handlers to avoid duplicates across repeated runs.
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=get_rich_console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
