"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.config import BOARD_DIMENSIONS
from src.core.exceptions import InvalidSquareError


@dataclass(frozen=True, order=True)
class Coordinate:
    """(row, col) on the grid. Row 0 is black's back rank, row 7 is white's back rank."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not is_within_bounds(self.row, self.col):
            raise InvalidSquareError(
                f"Coordinate out of bounds: ({self.row}, {self.col}). Both must lie in [0, {BOARD_DIMENSIONS[0] - 1}]."
            )

    @classmethod
    def from_algebraic(cls, sq: str) -> Coordinate:
        """Algebraic notation: 'a8' is (0, 0), 'h1' is (7, 7)"""
        if len(sq) != 2 or not sq[1].isdigit():
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")
        col = ord(sq[0].lower()) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_DIMENSIONS[0] - self.row}"

    def offset(self, d_row: int, d_col: int) -> Coordinate | None:
        """Neighbouring coordinate, or None if it falls off the board"""
        row, col = self.row + d_row, self.col + d_col
        if not is_within_bounds(row, col):
            return None
        return Coordinate(row, col)


def is_within_bounds(row: int, col: int) -> bool:
    return (0 <= row < BOARD_DIMENSIONS[0]) and (0 <= col < BOARD_DIMENSIONS[1])


def all_coordinates() -> list[Coordinate]:
    """Every square on the board, row by row starting at black's back rank."""
    return [
        Coordinate(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
