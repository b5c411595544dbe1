"""Shared constants and logging setup."""

from __future__ import annotations

import logging

# Smallest grid that still has moves.
MIN_SIZE = 2

# Range accepted by the command line.
CLI_MIN_SIZE = 2
CLI_MAX_SIZE = 8

DEFAULT_SIZE = 3

# Sizes offered as one-key shortcuts by the terminal frontend.
QUICK_SIZES = (3, 4, 5)

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route log records through Rich.  Called by the CLI only."""
    from rich.logging import RichHandler

    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
