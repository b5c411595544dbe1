"""Rich terminal frontend — tables, colours, and panels.

Renders what the game engine reports and turns keypresses into moves.
The clock lives here: it starts on the first applied move and stops when
the puzzle is solved.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gamegenerator import RandomSource
from backend.engine.gameplay import GamePlay, MoveResult
from backend.models.board import Board, Direction
from backend.settings import QUICK_SIZES
from frontend.cli.input_handler import get_key, get_key_timeout

logger = logging.getLogger(__name__)

console = Console()

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- helpers ------------------------------------------------------------------


def format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


class Stopwatch:
    """Elapsed-seconds counter started by the first move."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._start: float | None = None
        self._stopped_at: float | None = None

    @property
    def started(self) -> bool:
        return self._start is not None

    @property
    def elapsed(self) -> float:
        if self._start is None:
            return 0.0
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return end - self._start

    def observe(self, result: MoveResult) -> None:
        """Update from a move outcome."""
        if not result.applied:
            return
        if self._start is None:
            self._start = self._clock()
        if result.solved and self._stopped_at is None:
            self._stopped_at = self._clock()


# -- board rendering ----------------------------------------------------------


def render_board(board: Board) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.tiles):
        cells: list[str] = []
        for c, val in enumerate(row):
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif board.is_tile_correct(r, c):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def board_panel(board: Board, title: str, style: str = "bright_blue") -> Panel:
    return Panel(
        Align.center(render_board(board)),
        title=f"[bold]{title}  {board.size}×{board.size}[/bold]",
        border_style=style,
        padding=(1, 2),
    )


# -- screens ------------------------------------------------------------------


def _stats(game: GamePlay, watch: Stopwatch) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.moves), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(format_time(watch.elapsed), style="bold yellow")
    return stats


def _draw_game(game: GamePlay, watch: Stopwatch) -> None:
    console.clear()

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  move   ", style="dim")
    controls.append("/".join(str(s) for s in QUICK_SIZES), style="bold cyan")
    controls.append("  size   ", style="dim")
    controls.append("R", style="bold cyan")
    controls.append("  restart   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  quit", style="dim")

    console.print()
    console.print(Align.center(board_panel(game.board, "Sliding Puzzle")))
    console.print(Align.center(_stats(game, watch)))
    console.print(Align.center(controls))


def _draw_win(game: GamePlay, watch: Stopwatch) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("Puzzle Solved!", style="bold green")
    congrats.append(
        f"  {int(watch.elapsed)} seconds, {game.moves} moves  ", style="green"
    )
    congrats.append("★\n", style="bold yellow")

    group = Group(
        Align.center(render_board(game.board)),
        Align.center(congrats),
    )
    panel = Panel(
        group,
        title=f"[bold green]Sliding Puzzle  {game.size}×{game.size}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(
        Align.center(Text("\n  Press R to play again, Q to quit.\n", style="dim"))
    )


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay) -> None:
    watch = Stopwatch()

    while True:
        if game.is_won:
            _draw_win(game, watch)
            key = get_key()
        else:
            _draw_game(game, watch)
            # Poll so the clock keeps ticking on screen.
            key = get_key_timeout(0.5) if watch.started else get_key()
            if key is None:
                continue

        if key == "quit":
            return
        if key in _DIRECTIONS and not game.is_won:
            watch.observe(game.move(_DIRECTIONS[key]))
        elif key == "restart":
            game.reset()
            watch = Stopwatch()
        elif key.startswith("size:"):
            game.reset(int(key.partition(":")[2]))
            watch = Stopwatch()


# -- public entry points ------------------------------------------------------


def show(size: int, rng: RandomSource | None = None) -> None:
    """Print one freshly generated board and return."""
    game = GamePlay(size, rng)
    console.print(board_panel(game.board, "Sliding Puzzle"))


def run(size: int, rng: RandomSource | None = None) -> None:
    """Launch the interactive Rich game."""
    game = GamePlay(size, rng)
    try:
        _play(game)
    finally:
        console.clear()
        console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
        logger.debug("Session ended after %d moves", game.moves)
