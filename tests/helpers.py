"""Constants and helpers shared by the test modules (fixtures live in conftest.py)."""

from typing import Callable

from src.engine.game import MoveResult
from src.engine.square import Coordinate

# kings and rooks on their original squares, pawns in front, nothing in between
CASTLING_FEN = "r3k2r/pppppppp/8/8/8/8/PPPPPPPP/R3K2R w KQkq -"

PlayFn = Callable[..., list[MoveResult]]


def parse_notation(notation: str) -> tuple[Coordinate, Coordinate]:
    """'e2e4' -> (Coordinate(6, 4), Coordinate(4, 4))"""
    return Coordinate.from_algebraic(notation[:2]), Coordinate.from_algebraic(notation[2:4])
