"""The Board holds the `position` (in chess: the configuration of pieces on the board) as an 8x8 grid"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.core.config import BOARD_DIMENSIONS, STARTING_FEN
from src.core.exceptions import InvalidFENError
from src.engine.pieces import FEN_TO_KIND, Color, Piece, PieceKind
from src.engine.square import Coordinate, all_coordinates

Grid = list[list[Optional[Piece]]]


def empty_grid() -> Grid:
    num_rows, num_cols = BOARD_DIMENSIONS
    return [[None for _ in range(num_cols)] for _ in range(num_rows)]


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Board:
        return cls(empty_grid())

    @classmethod
    def initial(cls) -> Board:
        return cls.from_fen(STARTING_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Board:
        """Construct a board from the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * the first group is row 0 (black's back rank), read from column 0 to column 7
        * black pawns fill row 1
        * rows 2 through 5 have 8 consecutive empty squares
        * white pawns (capital letters) fill row 6, white pieces row 7
        """
        num_rows, num_cols = BOARD_DIMENSIONS
        fen_by_rows = fen_str.split("/")
        if len(fen_by_rows) != num_rows:
            raise InvalidFENError(
                f"Expected {num_rows} rows separated by '/', got {len(fen_by_rows)}: {fen_str!r}"
            )

        grid = empty_grid()
        for row, fen_one_row in enumerate(fen_by_rows):
            col = 0
            for character in fen_one_row:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
                    continue
                if character.lower() not in FEN_TO_KIND:
                    raise InvalidFENError(
                        f"Unknown piece character {character!r} in {fen_str!r}"
                    )
                if col >= num_cols:
                    raise InvalidFENError(f"Row {row} is too long in {fen_str!r}")
                grid[row][col] = Piece.from_fen(character)
                col += 1

            if col != num_cols:
                raise InvalidFENError(
                    f"Row {row} covers {col} columns instead of {num_cols} in {fen_str!r}"
                )
        return cls(grid)

    def to_fen(self) -> str:
        """Rows are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _row_to_fen(self, row: int) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in self.grid[row]:
            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def copy(self) -> Board:
        """Pieces are immutable, so copying the rows is enough for a scratch board."""
        return Board([list(row) for row in self.grid])

    def piece_at(self, square: Coordinate) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def is_empty(self, square: Coordinate) -> bool:
        return self.piece_at(square) is None

    def place_piece(self, piece: Piece, square: Coordinate) -> None:
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: Coordinate) -> Optional[Piece]:
        piece = self.piece_at(square)
        self.grid[square.row][square.col] = None
        return piece

    def move_piece(self, from_square: Coordinate, to_square: Coordinate) -> None:
        """Relocate whatever stands on from_square. The destination is overwritten."""
        piece_that_moved = self.remove_piece(from_square)
        self.grid[to_square.row][to_square.col] = piece_that_moved

    def locate_color(self, color: Color) -> list[Coordinate]:
        return [
            square
            for square in all_coordinates()
            if (piece := self.piece_at(square)) is not None and piece.color == color
        ]

    def find_king(self, color: Color) -> Optional[Coordinate]:
        king = Piece(PieceKind.KING, color)
        return next(
            (square for square in all_coordinates() if self.piece_at(square) == king),
            None,
        )

    def is_path_clear(self, from_square: Coordinate, to_square: Coordinate) -> bool:
        """Every square strictly between the two (on a shared row, column or diagonal) must be empty"""
        return all(
            self.is_empty(square) for square in squares_between(from_square, to_square)
        )


def squares_between(from_square: Coordinate, to_square: Coordinate) -> list[Coordinate]:
    """
    Squares strictly in between two squares lying on the same row, column or diagonal.

    Raises ValueError for squares that do not share a line.
    """
    d_row = to_square.row - from_square.row
    d_col = to_square.col - from_square.col
    if d_row != 0 and d_col != 0 and abs(d_row) != abs(d_col):
        raise ValueError(
            f"squares_between requires both squares to share a line. \n from: {from_square}\n to:{to_square}"
        )

    step_row = (d_row > 0) - (d_row < 0)
    step_col = (d_col > 0) - (d_col < 0)
    squares_found: list[Coordinate] = []
    row, col = from_square.row + step_row, from_square.col + step_col
    while (row, col) != (to_square.row, to_square.col):
        squares_found.append(Coordinate(row, col))
        row += step_row
        col += step_col
    return squares_found
