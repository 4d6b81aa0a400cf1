"""Unit tests for /src/engine/rules.py"""

import pytest

from src.core.shared_types import GameStatus
from src.engine.board import Board
from src.engine.castling import CastlingRights, CastlingSide
from src.engine.pieces import Color, Piece, PieceKind
from src.engine.rules import (
    board_after_move,
    can_castle,
    derive_status,
    has_legal_moves,
    is_castle_attempt,
    is_en_passant_capture,
    is_in_check,
    legal_destinations,
)
from src.engine.square import Coordinate

CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R"
# white pawn b5 may take c5 en passant, but that opens the fifth row for the rook on h5
EN_PASSANT_PIN_FEN = "8/8/8/KPp4r/8/8/8/4k3"
BACK_RANK_MATE_FEN = "R5k1/5ppp/8/8/8/8/8/6K1"
STALEMATE_FEN = "7k/8/6Q1/8/8/8/8/K7"


def sq(name: str) -> Coordinate:
    return Coordinate.from_algebraic(name)


def names(squares: set[Coordinate]) -> set[str]:
    return {square.to_algebraic() for square in squares}


# --- CHECK ---
@pytest.mark.parametrize(
    "fen, color, expected",
    [
        # rook on the open e-file
        ("4k3/8/8/8/8/8/8/4R1K1", Color.BLACK, True),
        ("4k3/8/8/8/8/8/8/4R1K1", Color.WHITE, False),
        # line blocked by a black pawn
        ("4k3/4p3/8/8/8/8/8/4R1K1", Color.BLACK, False),
        # pawns only attack diagonally
        ("8/8/8/4k3/3P4/8/8/6K1", Color.BLACK, True),
        ("8/8/8/4k3/4P3/8/8/6K1", Color.BLACK, False),
        # knight
        ("4k3/8/3N4/8/8/8/8/6K1", Color.BLACK, True),
        # bishop on the long diagonal
        ("7k/8/8/8/8/8/8/B5K1", Color.BLACK, True),
        ("Q7/8/8/8/8/8/8/k5K1", Color.BLACK, True),
    ],
)
def test_is_in_check(fen: str, color: Color, expected: bool) -> None:
    assert is_in_check(Board.from_fen(fen), color) is expected


def test_no_king_means_no_check() -> None:
    board = Board.from_fen("8/8/8/8/8/8/8/4R3")
    assert not is_in_check(board, Color.BLACK)


# --- LEGAL MOVES ---
def test_initial_position_destinations() -> None:
    board = Board.initial()
    rights = CastlingRights()
    assert names(legal_destinations(board, sq("e2"), Color.WHITE, rights)) == {"e3", "e4"}
    assert names(legal_destinations(board, sq("g1"), Color.WHITE, rights)) == {"f3", "h3"}
    assert legal_destinations(board, sq("e1"), Color.WHITE, rights) == set()
    # nothing to move for the wrong color / an empty square
    assert legal_destinations(board, sq("e7"), Color.WHITE, rights) == set()
    assert legal_destinations(board, sq("e4"), Color.WHITE, rights) == set()


def test_pinned_piece_cannot_move() -> None:
    board = Board.from_fen("4k3/4r3/8/8/8/8/4B3/4K3")
    assert legal_destinations(board, sq("e2"), Color.WHITE, CastlingRights.none()) == set()


def test_king_cannot_step_into_check() -> None:
    board = Board.from_fen("4k3/8/8/8/8/8/3r4/7K")
    destinations = names(legal_destinations(board, sq("h1"), Color.WHITE, CastlingRights.none()))
    assert destinations == {"g1"}


def test_must_resolve_check() -> None:
    """In check from the rook on e8: only blocking, capturing or moving the king is allowed"""
    board = Board.from_fen("4r1k1/8/8/8/8/8/3P4/4K1N1")
    rights = CastlingRights.none()
    assert is_in_check(board, Color.WHITE)
    # pawn pushes do not help
    assert legal_destinations(board, sq("d2"), Color.WHITE, rights) == set()
    # the knight can only interpose
    assert names(legal_destinations(board, sq("g1"), Color.WHITE, rights)) == {"e2"}
    # king steps off the e-file
    assert names(legal_destinations(board, sq("e1"), Color.WHITE, rights)) == {"d1", "f1", "f2"}


def test_en_passant_that_exposes_the_king_is_illegal() -> None:
    board = Board.from_fen(EN_PASSANT_PIN_FEN)
    en_passant = sq("c6")
    assert is_en_passant_capture(board, sq("b5"), sq("c6"), en_passant)

    destinations = legal_destinations(
        board, sq("b5"), Color.WHITE, CastlingRights.none(), en_passant
    )
    assert names(destinations) == {"b6"}


def test_board_after_en_passant_removes_captured_pawn() -> None:
    board = Board.from_fen("8/8/8/3pP3/8/8/8/8")
    scratch = board_after_move(board, sq("e5"), sq("d6"), sq("d6"))
    assert scratch.is_empty(sq("d5"))
    assert scratch.is_empty(sq("e5"))
    assert scratch.piece_at(sq("d6")) == Piece(PieceKind.PAWN, Color.WHITE)
    # the original is untouched
    assert board.piece_at(sq("d5")) == Piece(PieceKind.PAWN, Color.BLACK)


# --- CASTLING ---
@pytest.mark.parametrize(
    "fen, rights, kingside, queenside",
    [
        (CASTLING_FEN, CastlingRights(), True, True),
        # f1 attacked (passed through)
        ("r3kr2/8/8/8/8/8/8/R3K2R", CastlingRights(), False, True),
        # g1 attacked (landing square)
        ("r3k1r1/8/8/8/8/8/8/R3K2R", CastlingRights(), False, True),
        # in check: no castling out of check
        ("r3k2r/8/8/4r3/8/8/8/R3K2R", CastlingRights(), False, False),
        # b1 attacked: the king does not cross it, so queenside castling is fine
        ("1r2k2r/8/8/8/8/8/8/R3K2R", CastlingRights(), True, True),
        # blocked by a knight on b1
        ("r3k2r/8/8/8/8/8/8/RN2K2R", CastlingRights(), True, False),
        # rights revoked
        (CASTLING_FEN, CastlingRights(white_kingside=False), False, True),
        # rook is missing from its corner
        ("r3k2r/8/8/8/8/8/8/R3K3", CastlingRights(), False, True),
    ],
)
def test_can_castle(
    fen: str, rights: CastlingRights, kingside: bool, queenside: bool
) -> None:
    board = Board.from_fen(fen)
    assert can_castle(board, Color.WHITE, CastlingSide.KINGSIDE, rights) is kingside
    assert can_castle(board, Color.WHITE, CastlingSide.QUEENSIDE, rights) is queenside


def test_black_castling() -> None:
    board = Board.from_fen(CASTLING_FEN)
    rights = CastlingRights()
    assert can_castle(board, Color.BLACK, CastlingSide.KINGSIDE, rights)
    assert can_castle(board, Color.BLACK, CastlingSide.QUEENSIDE, rights)
    assert not can_castle(
        board, Color.BLACK, CastlingSide.QUEENSIDE, rights.revoke(Color.BLACK)
    )


def test_king_destinations_include_castling() -> None:
    board = Board.from_fen(CASTLING_FEN)
    destinations = names(legal_destinations(board, sq("e1"), Color.WHITE, CastlingRights()))
    assert destinations == {"d1", "d2", "e2", "f2", "f1", "c1", "g1"}


def test_is_castle_attempt() -> None:
    board = Board.from_fen(CASTLING_FEN)
    assert is_castle_attempt(board, sq("e1"), sq("g1")) == CastlingSide.KINGSIDE
    assert is_castle_attempt(board, sq("e8"), sq("c8")) == CastlingSide.QUEENSIDE
    assert is_castle_attempt(board, sq("e1"), sq("f1")) is None
    assert is_castle_attempt(board, sq("a1"), sq("c1")) is None


# --- STATUS ---
@pytest.mark.parametrize(
    "fen, side_to_move, expected",
    [
        (Board.initial().to_fen(), Color.WHITE, GameStatus.PLAYING),
        ("4k3/8/8/8/8/8/8/4R1K1", Color.BLACK, GameStatus.CHECK),
        (BACK_RANK_MATE_FEN, Color.BLACK, GameStatus.CHECKMATE),
        (BACK_RANK_MATE_FEN, Color.WHITE, GameStatus.PLAYING),
        (STALEMATE_FEN, Color.BLACK, GameStatus.STALEMATE),
    ],
)
def test_derive_status(fen: str, side_to_move: Color, expected: GameStatus) -> None:
    board = Board.from_fen(fen)
    assert derive_status(board, side_to_move, CastlingRights.none()) == expected


def test_has_legal_moves() -> None:
    assert has_legal_moves(Board.initial(), Color.BLACK, CastlingRights())
    assert not has_legal_moves(Board.from_fen(STALEMATE_FEN), Color.BLACK, CastlingRights.none())


def test_checkmate_by_lone_king_surrounded() -> None:
    """Only a king left; every square around it is attacked and it is in check"""
    board = Board.from_fen("k7/8/1K6/8/8/8/8/7R")
    # rook h1 -> h8 would be mate; play it on the scratch board
    mated = board_after_move(board, sq("h1"), sq("h8"))
    assert derive_status(mated, Color.BLACK, CastlingRights.none()) == GameStatus.CHECKMATE
