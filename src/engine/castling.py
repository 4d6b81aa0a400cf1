"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Self

from src.engine.pieces import Color
from src.engine.square import Coordinate


class CastlingSide(Enum):
    KINGSIDE = "kingside"
    QUEENSIDE = "queenside"


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, the king / rook should still be at their starting squares,
    but positions built from a FEN string might disagree, so can_castle checks the board as well.
    """

    king_from: Coordinate
    king_to: Coordinate
    rook_from: Coordinate
    rook_to: Coordinate

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Coordinate.from_algebraic(k_from)
        king_to = Coordinate.from_algebraic(k_to)
        rook_from = Coordinate.from_algebraic(r_from)
        rook_to = Coordinate.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (Color.WHITE, CastlingSide.KINGSIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    (Color.WHITE, CastlingSide.QUEENSIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    (Color.BLACK, CastlingSide.KINGSIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    (Color.BLACK, CastlingSide.QUEENSIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}


@dataclass(frozen=True)
class CastlingRights:
    """
    Per color, two independent flags.

    Rights only ever get revoked: every update returns a new object with fewer rights,
    there is no method that grants a right back.
    """

    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    @classmethod
    def none(cls) -> Self:
        return cls(False, False, False, False)

    def has(self, color: Color, side: CastlingSide) -> bool:
        return getattr(self, _field_name(color, side))

    def has_any(self, color: Color) -> bool:
        return any(self.has(color, side) for side in CastlingSide)

    def revoke(self, color: Color, side: Optional[CastlingSide] = None) -> Self:
        """Revoke a single side, or both sides when no side is given (the king moved)"""
        sides = [side] if side is not None else list(CastlingSide)
        return replace(self, **{_field_name(color, s): False for s in sides})

    def as_dict(self) -> dict[str, dict[str, bool]]:
        return {
            color.name.lower(): {side.value: self.has(color, side) for side in CastlingSide}
            for color in Color
        }


def _field_name(color: Color, side: CastlingSide) -> str:
    return f"{color.name.lower()}_{side.value}"


def castling_side_for(color: Color, rook_square: Coordinate) -> Optional[CastlingSide]:
    """Which castling right a rook standing on this (corner) square belongs to, if any"""
    return next(
        (
            side
            for side in CastlingSide
            if CASTLING_RULES[(color, side)].rook_from == rook_square
        ),
        None,
    )


def castling_side_of_king_move(
    color: Color, from_square: Coordinate, to_square: Coordinate
) -> Optional[CastlingSide]:
    """A king move from its home square to one of the castling destinations is a castle attempt"""
    return next(
        (
            side
            for side in CastlingSide
            if CASTLING_RULES[(color, side)].king_from == from_square
            and CASTLING_RULES[(color, side)].king_to == to_square
        ),
        None,
    )
