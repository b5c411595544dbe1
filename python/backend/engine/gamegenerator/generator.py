"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import logging
import random
from typing import Protocol

from backend.models.board import Board, validate_size

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything that yields unbiased integers in ``[a, b]``.

    ``random.Random`` satisfies this; tests pass scripted sources.
    """

    def randint(self, a: int, b: int) -> int: ...


class GameGenerator:
    """Creates solvable puzzles from a uniform shuffle plus a parity fix."""

    @staticmethod
    def solved(size: int) -> Board:
        """Return the goal-state board (all tiles in order, blank bottom-right)."""
        size = validate_size(size)
        return Board.from_flat(size, GameGenerator._goal_sequence(size))

    @staticmethod
    def generate(size: int, rng: RandomSource | None = None) -> Board:
        """Return a random *solvable* board of the given size.

        Raises ``InvalidBoardSizeError`` for sizes below 2.
        """
        size = validate_size(size)
        if rng is None:
            rng = random.Random()

        flat = GameGenerator.shuffle(GameGenerator._goal_sequence(size), rng)
        flat = GameGenerator.make_solvable(flat, size)
        board = Board.from_flat(size, flat)
        logger.debug(
            "Generated %dx%d board, blank at %s", size, size, board.blank_pos
        )
        return board

    # -- shuffling ------------------------------------------------------------

    @staticmethod
    def shuffle(flat: list[int], rng: RandomSource) -> list[int]:
        """Fisher–Yates shuffle; returns a new list."""
        result = list(flat)
        for i in range(len(result) - 1, 0, -1):
            j = rng.randint(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    # -- solvability ----------------------------------------------------------

    @staticmethod
    def count_inversions(flat: list[int]) -> int:
        """Count out-of-order pairs among the non-blank tiles."""
        tiles = [v for v in flat if v != 0]
        inversions = 0
        for i in range(len(tiles)):
            for j in range(i + 1, len(tiles)):
                if tiles[i] > tiles[j]:
                    inversions += 1
        return inversions

    @staticmethod
    def is_solvable(flat: list[int], size: int) -> bool:
        """Apply the N-puzzle parity rule to a row-major tile list.

        * odd size: the inversion count must be even;
        * even size: inversions plus the blank's row, counted 1-based from
          the bottom, must be odd.
        """
        inversions = GameGenerator.count_inversions(flat)
        if size % 2 == 1:
            return inversions % 2 == 0
        row_from_bottom = size - flat.index(0) // size
        return (inversions + row_from_bottom) % 2 == 1

    @staticmethod
    def make_solvable(flat: list[int], size: int) -> list[int]:
        """Swap the first two non-blank tiles if *flat* is unsolvable.

        One transposition of two tiles flips inversion parity, which flips
        the verdict of ``is_solvable``.
        """
        result = list(flat)
        if GameGenerator.is_solvable(result, size):
            return result

        first, second = [i for i, v in enumerate(result) if v != 0][:2]
        result[first], result[second] = result[second], result[first]
        logger.debug("Corrected parity by swapping indices %d and %d", first, second)
        return result

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _goal_sequence(size: int) -> list[int]:
        return list(range(1, size * size)) + [0]
