"""Board model for the sliding puzzle game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from backend.settings import MIN_SIZE

Position = tuple[int, int]


class InvalidBoardSizeError(ValueError):
    """Raised when a board dimension is not a playable size."""

    def __init__(self, size: object) -> None:
        super().__init__(
            f"Board size must be an integer >= {MIN_SIZE}, got {size!r}."
        )
        self.size = size


def validate_size(size: object) -> int:
    """Return *size* if it is a playable dimension, else raise."""
    if isinstance(size, bool) or not isinstance(size, int) or size < MIN_SIZE:
        raise InvalidBoardSizeError(size)
    return size


class Direction(StrEnum):
    """Direction the *tile* slides into the blank."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass
class Board:
    """Represents the sliding puzzle board.

    Tiles are stored as a 2D list of ints. 0 represents the blank space.
    ``blank_pos`` must always point at the cell holding 0.
    """

    size: int
    tiles: list[list[int]]
    blank_pos: Position

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major tile list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        size = validate_size(size)
        if len(flat) != size * size:
            raise ValueError(
                f"Expected {size * size} tiles for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        if sorted(flat) != list(range(size * size)):
            raise ValueError(
                f"Tiles must be a permutation of 0..{size * size - 1}."
            )
        tiles: list[list[int]] = []
        blank_pos: Position = (0, 0)
        for r in range(size):
            row = list(flat[r * size : (r + 1) * size])
            for c, v in enumerate(row):
                if v == 0:
                    blank_pos = (r, c)
            tiles.append(row)
        return cls(size=size, tiles=tiles, blank_pos=blank_pos)

    @classmethod
    def from_rows(cls, rows: list[list[int]]) -> Board:
        """Create a board from nested rows, e.g. ``[[1, 2], [3, 0]]``."""
        size = len(rows)
        if any(len(row) != size for row in rows):
            raise ValueError("Board rows must form a square grid.")
        return cls.from_flat(size, [v for row in rows for v in row])

    # -- queries --------------------------------------------------------------

    def flat(self) -> list[int]:
        """Return the tiles in row-major order."""
        return [v for row in self.tiles for v in row]

    def contains(self, position: Position) -> bool:
        row, col = position
        return 0 <= row < self.size and 0 <= col < self.size

    def is_solved(self) -> bool:
        """Check if all tiles are in their goal positions.

        The first mismatch, including a misplaced blank, disqualifies.
        """
        flat = self.flat()
        last = len(flat) - 1
        for i in range(last):
            if flat[i] != i + 1:
                return False
        return flat[last] == 0

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if a specific tile is in its goal position."""
        val = self.tiles[row][col]
        if val == 0:
            return row == self.size - 1 and col == self.size - 1
        expected_row = (val - 1) // self.size
        expected_col = (val - 1) % self.size
        return row == expected_row and col == expected_col

    def snapshot(self) -> tuple[tuple[int, ...], ...]:
        """Immutable view of the grid for observers."""
        return tuple(tuple(row) for row in self.tiles)

    def copy(self) -> Board:
        return Board(
            size=self.size,
            tiles=[row[:] for row in self.tiles],
            blank_pos=self.blank_pos,
        )

    # -- mutation -------------------------------------------------------------

    def swap_with_blank(self, target: Position) -> None:
        """Exchange the tile at *target* with the blank."""
        br, bc = self.blank_pos
        tr, tc = target
        self.tiles[br][bc], self.tiles[tr][tc] = (
            self.tiles[tr][tc],
            self.tiles[br][bc],
        )
        self.blank_pos = (tr, tc)
