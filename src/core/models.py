"""
Boundary layer data model(s).

The engine renders its state into these objects. The service layer and any presentation / realtime collaborator only
ever see these snapshots, never the engine's internal Board or history.
(Decouples the wire format of the surrounding layers from the domain objects.)
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.core.shared_types import Color, GameStatus, PieceKind

# Type aliases to make the snapshot easier to read
PieceCode = str  # single FEN character, upper case for white
SquareName = str  # algebraic, 'a1' - 'h8'


class MoveModel(BaseModel):
    """Transport-safe representation of one entry of the move history."""

    model_config = ConfigDict(frozen=True)

    from_square: SquareName
    to_square: SquareName
    piece: PieceKind
    color: Color
    captured_piece: Optional[PieceKind] = None
    captured_color: Optional[Color] = None
    is_en_passant: bool = False
    en_passant_captured_square: Optional[SquareName] = None
    castling_side: Optional[str] = None
    promoted_to: Optional[PieceKind] = None

    @property
    def notation(self) -> str:
        """Coordinate notation, ex) 'e2e4'"""
        return f"{self.from_square}{self.to_square}"


class GameSnapshot(BaseModel):
    """Everything needed to render (or broadcast) a game after a move."""

    model_config = ConfigDict(frozen=True)

    board: list[list[Optional[PieceCode]]]
    side_to_move: Color
    status: GameStatus
    move_history: list[MoveModel]
    castling_rights: dict[str, dict[str, bool]]
    en_passant_target: Optional[SquareName] = None
    last_move: list[SquareName] = []
