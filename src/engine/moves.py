"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define a pseudo-legal move predicate for each piece kind.
A predicate answers "could the piece on `from_square` move to `to_square`?" and ignores whether
the mover's own king ends up in check.

That filter is applied once, uniformly, in rules.py
"""

from typing import Callable, Optional, Protocol

from src.engine.pieces import Color, Piece, PieceKind
from src.engine.square import Coordinate

# Pawns reaching the last row always become a queen (no under-promotion choice)
PROMOTION_KIND = PieceKind.QUEEN


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: Coordinate) -> Optional[Piece]: ...
    def is_empty(self, square: Coordinate) -> bool: ...
    def is_path_clear(self, from_square: Coordinate, to_square: Coordinate) -> bool: ...


# --- PAWN GEOMETRY ---
def pawn_direction(color: Color) -> int:
    """White moves toward row 0, black toward row 7"""
    return -1 if color == Color.WHITE else 1


def pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    """The row farthest from where the pawns of this color start"""
    return 0 if color == Color.WHITE else 7


def is_double_step(piece: Piece, from_square: Coordinate, to_square: Coordinate) -> bool:
    return piece.kind == PieceKind.PAWN and abs(to_square.row - from_square.row) == 2


def en_passant_victim_square(
    from_square: Coordinate, to_square: Coordinate
) -> Coordinate:
    """The captured pawn stands on the mover's row, in the destination's column"""
    return Coordinate(from_square.row, to_square.col)


# --- MOVEMENT RULES ---
def is_valid_pawn_move(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    color: Color,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    """
    A pawn:
    - moves by a single square forward onto an empty square.
    - can move by two from its starting row, if both squares in front of it are empty
    - takes diagonally, either an opposing piece or (en passant) the pawn that just passed the target square
    """
    direction = pawn_direction(color)
    row_diff = to_square.row - from_square.row
    col_diff = abs(to_square.col - from_square.col)

    if col_diff == 0:
        if row_diff == direction:
            return board.is_empty(to_square)
        if row_diff == 2 * direction and from_square.row == pawn_start_row(color):
            passed_over = from_square.offset(direction, 0)
            return (
                passed_over is not None
                and board.is_empty(passed_over)
                and board.is_empty(to_square)
            )
        return False

    if col_diff != 1 or row_diff != direction:
        return False

    target = board.piece_at(to_square)
    if target is not None:
        return target.color != color

    if en_passant is not None and to_square == en_passant:
        victim = board.piece_at(en_passant_victim_square(from_square, to_square))
        return victim == Piece(PieceKind.PAWN, color.opponent)
    return False


def is_valid_rook_move(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    color: Color,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    """Rooks move either horizontally or vertically"""
    same_row = from_square.row == to_square.row
    same_col = from_square.col == to_square.col
    if same_row == same_col:
        # either a null move or not on a straight line
        return False
    return board.is_path_clear(from_square, to_square)


def is_valid_bishop_move(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    color: Color,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    row_diff = abs(to_square.row - from_square.row)
    col_diff = abs(to_square.col - from_square.col)
    if row_diff == 0 or row_diff != col_diff:
        return False
    return board.is_path_clear(from_square, to_square)


def is_valid_queen_move(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    color: Color,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return is_valid_rook_move(
        board, from_square, to_square, color
    ) or is_valid_bishop_move(board, from_square, to_square, color)


def is_valid_knight_move(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    color: Color,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    """Knights jump in an L-shape and are never blocked"""
    deltas = (
        abs(to_square.row - from_square.row),
        abs(to_square.col - from_square.col),
    )
    return deltas in {(2, 1), (1, 2)}


def is_valid_king_move(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    color: Color,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled separately).
    """
    row_diff = abs(to_square.row - from_square.row)
    col_diff = abs(to_square.col - from_square.col)
    return row_diff <= 1 and col_diff <= 1 and (row_diff, col_diff) != (0, 0)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MoveRuleFn = Callable[
    [Board, Coordinate, Coordinate, Color, Optional[Coordinate]], bool
]
MOVEMENT_RULES: dict[PieceKind, MoveRuleFn] = {
    PieceKind.PAWN: is_valid_pawn_move,
    PieceKind.KNIGHT: is_valid_knight_move,
    PieceKind.BISHOP: is_valid_bishop_move,
    PieceKind.ROOK: is_valid_rook_move,
    PieceKind.QUEEN: is_valid_queen_move,
    PieceKind.KING: is_valid_king_move,
}


def is_pseudo_legal(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    color: Color,
    en_passant: Optional[Coordinate] = None,
) -> bool:
    """
    Universal filters + the movement rule of the piece standing on from_square.

    * there must be a piece of `color` to move
    * the destination must not hold a piece of the mover's own color
    """
    piece = board.piece_at(from_square)
    if piece is None or piece.color != color:
        return False

    target = board.piece_at(to_square)
    if target is not None and target.color == color:
        return False

    movement_rule = MOVEMENT_RULES[piece.kind]
    return movement_rule(board, from_square, to_square, color, en_passant)
