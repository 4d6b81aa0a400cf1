"""Unit tests for /src/engine/square.py"""

from string import ascii_lowercase

import pytest

from src.core.config import BOARD_DIMENSIONS
from src.core.exceptions import InvalidSquareError
from src.engine.square import Coordinate, all_coordinates, is_within_bounds


@pytest.mark.parametrize(
    "row, col, notation",
    [
        (row, col, f"{ascii_lowercase[col]}{8 - row}")
        for row in range(8)
        for col in range(8)
    ],
)
def test_creating_from_algebraic(row: int, col: int, notation: str) -> None:
    """'a8' maps to row 0, col 0 (black's back rank) and 'h1' to row 7, col 7"""
    square = Coordinate.from_algebraic(notation)
    assert square == Coordinate(row, col)
    assert square.to_algebraic() == notation


def test_well_known_squares() -> None:
    assert Coordinate.from_algebraic("e2") == Coordinate(6, 4)
    assert Coordinate.from_algebraic("e8") == Coordinate(0, 4)
    assert Coordinate.from_algebraic("E1") == Coordinate(7, 4)


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (8, 0), (0, 8), (12, -3)])
def test_out_of_bounds_coordinate_is_rejected(row: int, col: int) -> None:
    """A coordinate off the board is a programming error and never reaches board indexing"""
    assert not is_within_bounds(row, col)
    with pytest.raises(InvalidSquareError):
        Coordinate(row, col)


@pytest.mark.parametrize("notation", ["", "e", "e9", "i1", "e0", "11", "e22"])
def test_malformed_algebraic_is_rejected(notation: str) -> None:
    with pytest.raises(InvalidSquareError):
        Coordinate.from_algebraic(notation)


def test_offset() -> None:
    square = Coordinate(0, 0)
    assert square.offset(1, 1) == Coordinate(1, 1)
    assert square.offset(-1, 0) is None


def test_all_coordinates() -> None:
    squares = all_coordinates()
    assert len(squares) == BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]
    assert len(set(squares)) == len(squares)
    assert squares[0] == Coordinate(0, 0)
    assert squares[-1] == Coordinate(7, 7)
