from backend.models.board import (
    Board,
    Direction,
    InvalidBoardSizeError,
    Position,
    validate_size,
)

__all__ = [
    "Board",
    "Direction",
    "InvalidBoardSizeError",
    "Position",
    "validate_size",
]
