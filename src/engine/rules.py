"""
Rules that depend on the whole position: check detection, castling, fully-legal destinations and the status of the game.

Every function here is pure: boards are never mutated, "what-if" questions are answered on a scratch copy.
"""

from typing import Optional

from src.core.shared_types import GameStatus
from src.engine.board import Board
from src.engine.castling import (
    CASTLING_RULES,
    CastlingRights,
    CastlingSide,
    castling_side_of_king_move,
)
from src.engine.moves import (
    en_passant_victim_square,
    is_pseudo_legal,
)
from src.engine.pieces import Color, Piece, PieceKind
from src.engine.square import Coordinate, all_coordinates


def is_in_check(board: Board, color: Color) -> bool:
    """
    The king of `color` is in check if any opposing piece has a pseudo-legal move onto its square.

    NOTE: a board without a king of this color is never in check.
    """
    king_square = board.find_king(color)
    if king_square is None:
        return False

    opponent = color.opponent
    return any(
        is_pseudo_legal(board, square, king_square, opponent)
        for square in board.locate_color(opponent)
    )


def is_en_passant_capture(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    en_passant: Optional[Coordinate],
) -> bool:
    """Diagonal pawn move onto the (empty) live en passant target"""
    piece = board.piece_at(from_square)
    return (
        piece is not None
        and piece.kind == PieceKind.PAWN
        and en_passant is not None
        and to_square == en_passant
        and from_square.col != to_square.col
        and board.is_empty(to_square)
    )


def board_after_move(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    en_passant: Optional[Coordinate] = None,
) -> Board:
    """
    Scratch copy of the board with the move played.

    The pawn taken en passant is removed as well, otherwise a capture that opens a line onto the king goes unnoticed.
    """
    scratch = board.copy()
    if is_en_passant_capture(board, from_square, to_square, en_passant):
        scratch.remove_piece(en_passant_victim_square(from_square, to_square))
    scratch.move_piece(from_square, to_square)
    return scratch


def leaves_king_safe(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    color: Color,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    return not is_in_check(board_after_move(board, from_square, to_square, en_passant), color)


def is_legal_ordinary_move(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    color: Color,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    """Pseudo-legal + does not put (or leave) your own king in check"""
    return is_pseudo_legal(
        board, from_square, to_square, color, en_passant
    ) and leaves_king_safe(board, from_square, to_square, color, en_passant)


# -- CASTLING ---
def can_castle(
    board: Board, color: Color, side: CastlingSide, rights: CastlingRights
) -> bool:
    """
    **you are allowed to castle if**

    * Castling rights are not yet revoked.
    * King and rook still stand on their original squares.
    * You are not currently in check (you cannot castle out of check).
    * Every square in between the king and the rook is empty.
    * The king does not pass through, or land on, an attacked square.
    """
    if not rights.has(color, side):
        return False

    squares = CASTLING_RULES[(color, side)]
    if board.piece_at(squares.king_from) != Piece(PieceKind.KING, color):
        return False
    if board.piece_at(squares.rook_from) != Piece(PieceKind.ROOK, color):
        return False

    if is_in_check(board, color):
        return False

    if not board.is_path_clear(squares.king_from, squares.rook_from):
        return False

    # probe every square the king crosses, including its destination
    step = 1 if squares.king_to.col > squares.king_from.col else -1
    for col in range(squares.king_from.col + step, squares.king_to.col + step, step):
        probe = Coordinate(squares.king_from.row, col)
        if not leaves_king_safe(board, squares.king_from, probe, color):
            return False
    return True


def castling_destinations(
    board: Board, color: Color, rights: CastlingRights
) -> set[Coordinate]:
    return {
        CASTLING_RULES[(color, side)].king_to
        for side in CastlingSide
        if can_castle(board, color, side, rights)
    }


def is_castle_attempt(board: Board, from_square: Coordinate, to_square: Coordinate) -> Optional[CastlingSide]:
    """The castling side if this is a king moving two squares from its home square, else None"""
    piece = board.piece_at(from_square)
    if piece is None or piece.kind != PieceKind.KING:
        return None
    return castling_side_of_king_move(piece.color, from_square, to_square)


# -- LEGAL MOVES ---
def legal_destinations(
    board: Board,
    from_square: Coordinate,
    color: Color,
    rights: CastlingRights,
    en_passant: Optional[Coordinate] = None,
) -> set[Coordinate]:
    """
    Every square the piece on from_square can legally move to.

    Empty set if there is no piece of `color` on the square.
    """
    piece = board.piece_at(from_square)
    if piece is None or piece.color != color:
        return set()

    destinations = {
        to_square
        for to_square in all_coordinates()
        if is_legal_ordinary_move(board, from_square, to_square, color, en_passant)
    }
    if piece.kind == PieceKind.KING and is_king_home_square(color, from_square):
        destinations |= castling_destinations(board, color, rights)
    return destinations


def is_king_home_square(color: Color, square: Coordinate) -> bool:
    return square == CASTLING_RULES[(color, CastlingSide.KINGSIDE)].king_from


def has_legal_moves(
    board: Board,
    color: Color,
    rights: CastlingRights,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    """Castling counts as a legal move here."""
    return any(
        legal_destinations(board, square, color, rights, en_passant)
        for square in board.locate_color(color)
    )


def derive_status(
    board: Board,
    side_to_move: Color,
    rights: CastlingRights,
    en_passant: Optional[Coordinate] = None,
) -> GameStatus:
    """Status for the side to move (i.e. computed after the move that was just applied)."""
    in_check = is_in_check(board, side_to_move)
    can_move = has_legal_moves(board, side_to_move, rights, en_passant)
    if in_check and not can_move:
        return GameStatus.CHECKMATE
    if not can_move:
        return GameStatus.STALEMATE
    if in_check:
        return GameStatus.CHECK
    return GameStatus.PLAYING
