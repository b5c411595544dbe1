#!/usr/bin/env python3
"""Sliding Puzzle Game.

Usage::

    python main.py                  # Rich terminal, default size
    python main.py -s 4             # 4×4
    python main.py --seed 7 --show  # print one generated board and exit
"""

import random
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.settings import (  # noqa: E402
    CLI_MAX_SIZE,
    CLI_MIN_SIZE,
    DEFAULT_SIZE,
    configure_logging,
)


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    size: int = typer.Option(
        DEFAULT_SIZE, "-s", "--size",
        min=CLI_MIN_SIZE, max=CLI_MAX_SIZE,
        help=f"Grid size ({CLI_MIN_SIZE}-{CLI_MAX_SIZE}).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the shuffle for a reproducible board.",
    ),
    show: bool = typer.Option(
        False, "--show",
        help="Print a generated board and exit.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Logging verbosity.",
    ),
) -> None:
    """Sliding Puzzle Game."""
    configure_logging(log_level.value)

    from frontend.cli.rich import app as rich_app

    rng = random.Random(seed)
    if show:
        rich_app.show(size, rng)
        return

    rich_app.run(size, rng)


if __name__ == "__main__":
    app()
