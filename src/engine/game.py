"""
The GameEngine is the entrypoint into the domain layer.
It owns the board and all ancillary state, and is responsible for orchestrating the business logic required to play a
turn: validating the move, updating the board (castling, en passant, promotion), revoking castling rights, recording
history and deriving the status for the next player.

The engine never raises for expected conditions. An illegal move or a move after the game ended is answered with a
rejected MoveResult and leaves every piece of state untouched.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import InvalidFENError, InvalidSquareError
from src.core.models import GameSnapshot, MoveModel
from src.core.shared_types import Color as ColorName
from src.core.shared_types import GameStatus, Rejection
from src.core.shared_types import PieceKind as PieceKindName
from src.engine.board import Board
from src.engine.castling import (
    CASTLING_RULES,
    CastlingRights,
    CastlingSide,
    castling_side_for,
)
from src.engine.moves import (
    PROMOTION_KIND,
    en_passant_victim_square,
    is_double_step,
    promotion_row,
)
from src.engine.pieces import Color, Piece, PieceKind
from src.engine.position import PositionState
from src.engine.rules import (
    derive_status,
    is_castle_attempt,
    is_en_passant_capture,
    legal_destinations,
)
from src.engine.rules import is_in_check as board_is_in_check
from src.engine.square import Coordinate

logger = logging.getLogger(__name__)

SquareLike = Coordinate | tuple[int, int]


def as_coordinate(square: SquareLike) -> Coordinate:
    """Call boundary: anything that is not a coordinate on the board is a programming error."""
    if isinstance(square, Coordinate):
        return square
    try:
        row, col = square
    except (TypeError, ValueError) as e:
        raise InvalidSquareError(f"Expected a (row, col) pair, got {square!r}") from e
    if not (isinstance(row, int) and isinstance(col, int)):
        raise InvalidSquareError(f"Row and column must be integers, got {square!r}")
    return Coordinate(row, col)


@dataclass(frozen=True)
class MoveRecord:
    """
    One entry of the move history.

    Stores the piece as it was before the move (a promoted pawn is recorded as a pawn), what it captured (and where),
    and the complete PositionState from before the move so undo can restore it as it was.
    """

    from_square: Coordinate
    to_square: Coordinate
    piece: Piece
    captured: Optional[Piece]
    is_en_passant: bool
    en_passant_captured_square: Optional[Coordinate]
    castling_side: Optional[CastlingSide]
    promoted_to: Optional[PieceKind]
    state_before: PositionState

    @property
    def color(self) -> Color:
        return self.piece.color

    @property
    def captured_square(self) -> Optional[Coordinate]:
        if self.captured is None:
            return None
        return self.en_passant_captured_square or self.to_square

    def to_model(self) -> MoveModel:
        return MoveModel(
            from_square=self.from_square.to_algebraic(),
            to_square=self.to_square.to_algebraic(),
            piece=PieceKindName[self.piece.kind.name],
            color=ColorName[self.piece.color.name],
            captured_piece=(
                PieceKindName[self.captured.kind.name] if self.captured else None
            ),
            captured_color=ColorName[self.captured.color.name] if self.captured else None,
            is_en_passant=self.is_en_passant,
            en_passant_captured_square=(
                self.en_passant_captured_square.to_algebraic()
                if self.en_passant_captured_square
                else None
            ),
            castling_side=self.castling_side.value if self.castling_side else None,
            promoted_to=(
                PieceKindName[self.promoted_to.name] if self.promoted_to else None
            ),
        )


@dataclass(frozen=True)
class MoveResult:
    """Answer to apply_move / undo. Truthy when the request was accepted."""

    accepted: bool
    status: GameStatus
    rejection: Optional[Rejection] = None
    record: Optional[MoveRecord] = None

    def __bool__(self) -> bool:
        return self.accepted


class GameEngine:
    """
    Board + turn state machine for a single game.

    Playing -> {Playing, Check} -> Checkmate | Stalemate (terminal). Only reset() leaves a terminal state.
    State is mutated exclusively by apply_move / undo / reset.

    NOTE: not thread safe. Callers must serialize calls on the same instance (one engine per game).
    """

    def __init__(self, board: Optional[Board] = None, state: Optional[PositionState] = None) -> None:
        self._board = board if board is not None else Board.initial()
        self._state = state if state is not None else PositionState()
        self._history: list[MoveRecord] = []
        self._status = self._derive_status()

    # --- CREATION ---
    @classmethod
    def new_game(cls) -> Self:
        return cls()

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """
        Start from a constructed position.

        <piece placement> <active color> [<castling rights> [<en passant square>]]

        Move counters (the 5th and 6th FEN fields) are accepted and ignored.
        """
        parts = fen.split()
        if not 2 <= len(parts) <= 6:
            raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen!r}")
        board = Board.from_fen(parts[0])
        state = PositionState.from_fen_fields(*parts[1:4])
        return cls(board, state)

    def to_fen(self) -> str:
        return f"{self._board.to_fen()} {self._state.to_fen_fields()}"

    def reset(self) -> None:
        """Back to the standard starting position with an empty history."""
        self._board = Board.initial()
        self._state = PositionState()
        self._history = []
        self._status = self._derive_status()
        logger.debug("game reset to the starting position")

    # --- READ ACCESS ---
    @property
    def game_status(self) -> GameStatus:
        return self._status

    @property
    def side_to_move(self) -> Color:
        return self._state.side_to_move

    @property
    def castling_rights(self) -> CastlingRights:
        return self._state.castling_rights

    @property
    def en_passant_target(self) -> Optional[Coordinate]:
        return self._state.en_passant_target

    @property
    def last_move(self) -> frozenset[Coordinate]:
        return self._state.last_move

    @property
    def move_history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def board(self) -> Board:
        """A copy: callers cannot mutate the engine's board."""
        return self._board.copy()

    def piece_at(self, square: SquareLike) -> Optional[Piece]:
        return self._board.piece_at(as_coordinate(square))

    def is_in_check(self, color: Optional[Color] = None) -> bool:
        """Is `color` (by default the side to move) in check?"""
        return board_is_in_check(self._board, color or self.side_to_move)

    def legal_moves_from(self, square: SquareLike) -> set[Coordinate]:
        """
        Destinations the presentation layer can highlight for the selected square.

        Empty set when nothing movable stands there (empty square, opponent's piece) or the game is over.
        """
        from_square = as_coordinate(square)
        if self._status.is_terminal:
            return set()
        return legal_destinations(
            self._board,
            from_square,
            self.side_to_move,
            self._state.castling_rights,
            self._state.en_passant_target,
        )

    def snapshot(self) -> GameSnapshot:
        """Render the full state. Identical move sequences always produce equal snapshots."""
        return GameSnapshot(
            board=[
                [piece.to_fen() if piece else None for piece in row]
                for row in self._board.grid
            ],
            side_to_move=ColorName[self.side_to_move.name],
            status=self._status,
            move_history=[record.to_model() for record in self._history],
            castling_rights=self._state.castling_rights.as_dict(),
            en_passant_target=(
                self.en_passant_target.to_algebraic() if self.en_passant_target else None
            ),
            last_move=sorted(square.to_algebraic() for square in self.last_move),
        )

    # --- STATE MACHINE ---
    def apply_move(self, from_square: SquareLike, to_square: SquareLike) -> MoveResult:
        """
        Attempt to make a move
        -----

        1. reject if the game is over, there is nothing of yours to move, or the move is illegal
        2. snapshot the move info (captured piece, state before the move)
        3. update the board (relocation, en passant removal, castling rook, promotion)
        4. compute the next position state (castling rights, en passant target, last move, side to move)
        5. update history and game status
        """
        from_square = as_coordinate(from_square)
        to_square = as_coordinate(to_square)

        if self._status.is_terminal:
            return self._reject(Rejection.GAME_OVER)

        piece = self._board.piece_at(from_square)
        if piece is None or piece.color != self.side_to_move:
            return self._reject(Rejection.NO_PIECE)

        if to_square not in self.legal_moves_from(from_square):
            return self._reject(Rejection.ILLEGAL_MOVE)

        record = self._create_record(piece, from_square, to_square)
        self._update_board(record)
        self._state = self._next_state(record)
        self._history.append(record)
        self._update_game_status()

        logger.debug(
            "%s %s %s -> %s, status: %s",
            piece.color.name.lower(),
            piece.kind.name.lower(),
            from_square.to_algebraic(),
            to_square.to_algebraic(),
            self._status,
        )
        return MoveResult(True, self._status, record=record)

    def undo(self) -> MoveResult:
        """
        Take back the most recent move.

        Castling rights, the en passant target and the last move markers are restored from the state stored with the
        move. Disallowed once the game reached a terminal state.
        """
        if self._status.is_terminal:
            return self._reject(Rejection.GAME_OVER)
        if not self._history:
            return self._reject(Rejection.NOTHING_TO_UNDO)

        record = self._history.pop()
        self._revert_board(record)
        self._state = record.state_before
        self._status = self._derive_status()

        logger.debug(
            "undid %s -> %s", record.from_square.to_algebraic(), record.to_square.to_algebraic()
        )
        return MoveResult(True, self._status, record=record)

    # -- PRIVATE HELPERS ---
    def _reject(self, reason: Rejection) -> MoveResult:
        logger.debug("request rejected: %s", reason)
        return MoveResult(False, self._status, rejection=reason)

    def _derive_status(self) -> GameStatus:
        return derive_status(
            self._board,
            self._state.side_to_move,
            self._state.castling_rights,
            self._state.en_passant_target,
        )

    def _update_game_status(self) -> None:
        """NOTE the position state has already been updated. The side to move is the opponent of the mover."""
        self._status = self._derive_status()
        if self._status.is_terminal:
            logger.info(
                "game over: %s with %s to move", self._status, self.side_to_move.name.lower()
            )

    def _create_record(
        self, piece: Piece, from_square: Coordinate, to_square: Coordinate
    ) -> MoveRecord:
        """Snapshot of the moving pieces before the updates are done."""
        en_passant = is_en_passant_capture(
            self._board, from_square, to_square, self._state.en_passant_target
        )
        victim_square = (
            en_passant_victim_square(from_square, to_square) if en_passant else None
        )
        captured = self._board.piece_at(victim_square or to_square)
        promoted_to = (
            PROMOTION_KIND
            if piece.kind == PieceKind.PAWN and to_square.row == promotion_row(piece.color)
            else None
        )
        return MoveRecord(
            from_square=from_square,
            to_square=to_square,
            piece=piece,
            captured=captured,
            is_en_passant=en_passant,
            en_passant_captured_square=victim_square,
            castling_side=is_castle_attempt(self._board, from_square, to_square),
            promoted_to=promoted_to,
            state_before=self._state,
        )

    def _update_board(self, record: MoveRecord) -> None:
        if record.en_passant_captured_square is not None:
            # the pawn taken en passant is not on the destination square
            self._board.remove_piece(record.en_passant_captured_square)

        self._board.move_piece(record.from_square, record.to_square)

        if record.promoted_to is not None:
            self._board.place_piece(
                record.piece.promoted_to(record.promoted_to), record.to_square
            )

        if record.castling_side is not None:
            squares = CASTLING_RULES[(record.color, record.castling_side)]
            self._board.move_piece(squares.rook_from, squares.rook_to)

    def _revert_board(self, record: MoveRecord) -> None:
        if record.castling_side is not None:
            squares = CASTLING_RULES[(record.color, record.castling_side)]
            self._board.move_piece(squares.rook_to, squares.rook_from)

        # the original piece goes back (a promoted queen turns into a pawn again)
        self._board.remove_piece(record.to_square)
        self._board.place_piece(record.piece, record.from_square)

        if record.captured is not None:
            assert record.captured_square is not None
            self._board.place_piece(record.captured, record.captured_square)

    def _next_state(self, record: MoveRecord) -> PositionState:
        """
        1. Revoke castling rights: king moves (both sides), rook leaves its corner, a rook gets captured on its corner
        2. New en passant target only after a double step, on the square passed over
        3. Mark the squares touched by this move
        4. Flip the side to move
        """
        color = record.color
        rights = self._state.castling_rights

        if record.piece.kind == PieceKind.KING:
            rights = rights.revoke(color)

        if record.piece.kind == PieceKind.ROOK:
            side = castling_side_for(color, record.from_square)
            if side is not None:
                rights = rights.revoke(color, side)

        if record.captured is not None and record.captured.kind == PieceKind.ROOK:
            assert record.captured_square is not None
            side = castling_side_for(record.captured.color, record.captured_square)
            if side is not None:
                rights = rights.revoke(record.captured.color, side)

        en_passant_target = None
        if is_double_step(record.piece, record.from_square, record.to_square):
            en_passant_target = Coordinate(
                (record.from_square.row + record.to_square.row) // 2,
                record.from_square.col,
            )

        last_move = {record.from_square, record.to_square}
        if record.castling_side is not None:
            squares = CASTLING_RULES[(color, record.castling_side)]
            last_move |= {squares.rook_from, squares.rook_to}

        return PositionState(
            side_to_move=color.opponent,
            castling_rights=rights,
            en_passant_target=en_passant_target,
            last_move=frozenset(last_move),
        )
