"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceKind(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


FEN_TO_KIND: dict[str, PieceKind] = {
    "p": PieceKind.PAWN,
    "n": PieceKind.KNIGHT,
    "b": PieceKind.BISHOP,
    "r": PieceKind.ROOK,
    "q": PieceKind.QUEEN,
    "k": PieceKind.KING,
}

KIND_TO_FEN: dict[PieceKind, str] = {value: key for key, value in FEN_TO_KIND.items()}


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        kind = FEN_TO_KIND[character.lower()]
        return cls(kind, color)

    def to_fen(self) -> str:
        return (
            KIND_TO_FEN[self.kind].upper()
            if self.color == Color.WHITE
            else KIND_TO_FEN[self.kind].lower()
        )

    def promoted_to(self, kind: PieceKind) -> Self:
        """Pieces are immutable: a promotion produces a new piece of the same color."""
        return type(self)(kind, self.color)
