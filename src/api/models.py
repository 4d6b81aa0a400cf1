"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.models import GameSnapshot, SquareName
from src.engine.square import Coordinate

# accepted after the destination square, but ignored
PROMOTION_LETTERS = frozenset("qrbn")


def _validate_square_name(value: str) -> str:
    """Malformed squares are rejected here, before they reach the engine's board indexing."""
    try:
        Coordinate.from_algebraic(value)
    except ValueError as e:
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        ) from e
    return value.lower()


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        parts = value.strip().split()
        if not 2 <= len(parts) <= 6:
            raise InvalidRequestError(
                "FEN string must contain between 2 and 6 space-separated parts."
            )
        return value.strip()


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)

    @classmethod
    def from_notation(cls, game_id: UUID, notation: str) -> Self:
        """
        Coordinate notation as sent by a client: 'e2e4' (from square + to square).
        A trailing promotion letter (q, r, b or n, as in 'e7e8q') is tolerated: pawns always promote to a queen.
        """
        notation = notation.strip()
        if len(notation) not in (4, 5) or (
            len(notation) == 5 and notation[4].lower() not in PROMOTION_LETTERS
        ):
            raise InvalidRequestError(f"Cannot interpret {notation!r} as a move.")
        return cls(game_id=game_id, from_square=notation[:2], to_square=notation[2:4])

    def coordinates(self) -> tuple[Coordinate, Coordinate]:
        return (
            Coordinate.from_algebraic(self.from_square),
            Coordinate.from_algebraic(self.to_square),
        )


class UndoRequest(BaseModel):
    game_id: UUID


class ResetRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    snapshot: GameSnapshot


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: SquareName
    legal_moves: list[SquareName]
