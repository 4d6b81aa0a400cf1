"""
Type definitions used across layers
"""

from enum import StrEnum


class GameStatus(StrEnum):
    PLAYING = "playing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.STALEMATE)


class Rejection(StrEnum):
    """Reasons the engine can refuse a request. Returned, never raised."""

    ILLEGAL_MOVE = "illegal move"
    NO_PIECE = "no piece of the side to move on the source square"
    GAME_OVER = "game is over"
    NOTHING_TO_UNDO = "no move to undo"


# --- String versions of the engine enums for the API layer. The engine uses its own (src/engine/pieces.py)
# --- NOTE same names are used on purpose, the imports show which version is used where


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceKind(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"
