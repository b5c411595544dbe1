"""Core gameplay logic — processes moves and checks win condition."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from backend.engine.gamegenerator import GameGenerator, RandomSource
from backend.engine.gamestate import GameState, GameStatus
from backend.models.board import Board, Direction, Position, validate_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a move attempt, as seen by a frontend."""

    applied: bool
    board: tuple[tuple[int, ...], ...]
    blank_pos: Position
    moves: int
    solved: bool


class GamePlay:
    """Orchestrates a single game session.

    Lifecycle: ``INITIALIZING`` while a board is generated, ``ACTIVE`` while
    moves are accepted, ``SOLVED`` once the goal order is reached. Only
    :meth:`reset` leaves ``SOLVED``.

    Not thread-safe: callers sharing one instance must serialise
    :meth:`try_move` and :meth:`reset` themselves.
    """

    def __init__(self, size: int, rng: RandomSource | None = None) -> None:
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self.size = validate_size(size)
        self.state = self._new_state(self.size)
        logger.info("New %dx%d game", self.size, self.size)

    @classmethod
    def from_board(cls, board: Board, rng: RandomSource | None = None) -> GamePlay:
        """Create a game session from an existing board (e.g. a test fixture).

        The board is revalidated and copied; a ``blank_pos`` that does not
        point at the 0 tile raises ``ValueError``.
        """
        own = Board.from_flat(board.size, board.flat())
        if own.blank_pos != board.blank_pos:
            raise ValueError(
                f"blank_pos {board.blank_pos} does not hold the blank "
                f"(found at {own.blank_pos})."
            )
        obj = object.__new__(cls)
        obj._rng = rng if rng is not None else random.Random()
        obj.size = own.size
        obj.state = GameState(own)
        obj.state.activate()
        return obj

    # -- lifecycle ------------------------------------------------------------

    def reset(self, size: int | None = None) -> Board:
        """Discard the current board and start over.

        *size* defaults to the current size. An invalid size raises
        ``InvalidBoardSizeError`` and leaves the running game untouched.
        Returns a copy of the new board.
        """
        new_size = self.size if size is None else validate_size(size)
        self.state = self._new_state(new_size)
        self.size = new_size
        logger.info("Reset to a new %dx%d game", new_size, new_size)
        return self.state.board.copy()

    # -- movement -------------------------------------------------------------

    def try_move(self, position: Position) -> MoveResult:
        """Slide the tile at *position* into the blank.

        The move is applied only while the game is active and *position* is
        orthogonally adjacent to the blank; otherwise nothing changes and
        ``applied`` is False.
        """
        board = self.state.board
        br, bc = board.blank_pos
        row, col = position

        if (
            not self.state.is_active
            or not board.contains(position)
            or abs(row - br) + abs(col - bc) != 1
        ):
            logger.debug("Rejected move %s (blank at %s)", position, board.blank_pos)
            return self._result(applied=False)

        board.swap_with_blank((row, col))
        self.state.increment_moves()
        logger.debug("Moved tile at %s, moves=%d", position, self.state.moves)

        if board.is_solved():
            self.state.mark_solved()
            logger.info("Puzzle solved in %d moves", self.state.moves)

        return self._result(applied=True)

    def move(self, direction: Direction) -> MoveResult:
        """Slide a tile in *direction* into the adjacent blank.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        """
        br, bc = self.state.board.blank_pos

        # The offset points to the tile that will slide into the blank.
        offsets = {
            Direction.UP: (1, 0),
            Direction.DOWN: (-1, 0),
            Direction.LEFT: (0, 1),
            Direction.RIGHT: (0, -1),
        }
        dr, dc = offsets[direction]
        return self.try_move((br + dr, bc + dc))

    # -- queries --------------------------------------------------------------

    def is_solved(self) -> bool:
        return self.state.is_solved

    @property
    def is_won(self) -> bool:
        return self.state.status is GameStatus.SOLVED

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def board(self) -> Board:
        """A copy of the current board; moves go through :meth:`try_move`."""
        return self.state.board.copy()

    @property
    def moves(self) -> int:
        return self.state.moves

    # -- helpers --------------------------------------------------------------

    def _new_state(self, size: int) -> GameState:
        state = GameState(GameGenerator.generate(size, self._rng))
        state.activate()
        return state

    def _result(self, applied: bool) -> MoveResult:
        board = self.state.board
        return MoveResult(
            applied=applied,
            board=board.snapshot(),
            blank_pos=board.blank_pos,
            moves=self.state.moves,
            solved=self.state.status is GameStatus.SOLVED,
        )
