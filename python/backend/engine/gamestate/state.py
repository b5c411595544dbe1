"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

from enum import StrEnum

from backend.models.board import Board


class GameStatus(StrEnum):
    INITIALIZING = "initializing"
    ACTIVE = "active"
    SOLVED = "solved"


class GameState:
    """Holds the current board, move counter, and lifecycle status.

    Wall-clock time is not tracked here; frontends time the game from the
    move events they observe.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.moves: int = 0
        self.status: GameStatus = GameStatus.INITIALIZING

    # -- lifecycle ------------------------------------------------------------

    def activate(self) -> None:
        self.status = GameStatus.ACTIVE

    def mark_solved(self) -> None:
        self.status = GameStatus.SOLVED

    @property
    def is_active(self) -> bool:
        return self.status is GameStatus.ACTIVE

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()
