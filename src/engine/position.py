"""
Everything about a position that is not the placement of the pieces: whose turn it is, castling rights,
the en passant target and the squares touched by the last move.

A PositionState is immutable. The game keeps the state from before every move in its history,
so undoing a move restores it verbatim instead of inferring it.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import InvalidFENError
from src.engine.castling import CastlingRights, CastlingSide
from src.engine.pieces import Color
from src.engine.square import Coordinate

# FEN letters for the castling rights, in the order they get notated
CASTLING_ORDER: tuple[tuple[str, Color, CastlingSide], ...] = (
    ("K", Color.WHITE, CastlingSide.KINGSIDE),
    ("Q", Color.WHITE, CastlingSide.QUEENSIDE),
    ("k", Color.BLACK, CastlingSide.KINGSIDE),
    ("q", Color.BLACK, CastlingSide.QUEENSIDE),
)


def castling_from_fen(castle_fen: str) -> CastlingRights:
    """parse the part of the FEN string that encodes castling rights"""
    if castle_fen != "-" and (
        not castle_fen or any(char not in "KQkq" for char in castle_fen)
    ):
        raise InvalidFENError(f"Cannot interpret castling rights: {castle_fen!r}")

    rights = CastlingRights()
    for char, color, side in CASTLING_ORDER:
        if char not in castle_fen:
            rights = rights.revoke(color, side)
    return rights


def castling_to_fen(castling_rights: CastlingRights) -> str:
    """create the part of the FEN string that encodes castling rights"""
    castling_chars = "".join(
        char for char, color, side in CASTLING_ORDER if castling_rights.has(color, side)
    )
    return castling_chars or "-"


@dataclass(frozen=True)
class PositionState:
    """
    Ancillary state next to the board.

    * side_to_move: the color that plays next
    * castling_rights: only ever revoked while playing
    * en_passant_target: the square a pawn passed over with a double step on the previous move (valid for one move)
    * last_move: squares touched by the previous move (2, or 4 when castling). Used for highlighting.
    """

    side_to_move: Color = Color.WHITE
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant_target: Optional[Coordinate] = None
    last_move: frozenset[Coordinate] = frozenset()

    @classmethod
    def from_fen_fields(
        cls, active_color: str, castling_str: str = "-", en_passant_algebraic: str = "-"
    ) -> Self:
        """
        Parse the FEN fields that follow the piece placement:

        <active color> <castling rights> <en passant square>

        * The active color is either "w" or "b"
        * Castling rights: "K"/"Q" for white king-side/queen-side, "k"/"q" for black. "-" when all rights are revoked.
        * The en passant square, or "-" if not available.
        """
        if active_color not in {"w", "b"}:
            raise InvalidFENError(f"Active color must be 'w' or 'b', got {active_color!r}")
        side_to_move = Color.WHITE if active_color == "w" else Color.BLACK

        castling_rights = castling_from_fen(castling_str)

        try:
            en_passant_target = (
                Coordinate.from_algebraic(en_passant_algebraic)
                if en_passant_algebraic != "-"
                else None
            )
        except ValueError as e:
            raise InvalidFENError(
                f"Cannot interpret en passant square: {en_passant_algebraic!r}"
            ) from e

        return cls(side_to_move, castling_rights, en_passant_target)

    def to_fen_fields(self) -> str:
        """reverse operation: write the FEN fields from the given data"""
        active_color = "w" if self.side_to_move == Color.WHITE else "b"
        castling_str = castling_to_fen(self.castling_rights)
        en_passant_algebraic = (
            self.en_passant_target.to_algebraic()
            if self.en_passant_target is not None
            else "-"
        )
        return f"{active_color} {castling_str} {en_passant_algebraic}"
