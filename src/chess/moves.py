"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the pseudo-legal destination squares for each piece type.


Legality (not leaving your own king in check) is checked later by the Board
"""

from typing import Callable, Optional, Protocol

from src.chess.castling import (
    CASTLING_RULES,
    castling_rook_squares,
    squares_between_on_row,
)
from src.chess.pieces import Piece
from src.chess.square import BOARD_SIZE, Square
from src.core.shared_types import Color, PieceType


class Board(Protocol):
    """Just the parts the movement strategies need"""

    en_passant_target: Optional[Square]

    def piece_at(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...


# (delta row, delta column)
Vector = tuple[int, int]

STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
KNIGHT_DELTAS: list[Vector] = [
    (-2, -1),
    (-2, 1),
    (-1, 2),
    (1, 2),
    (2, -1),
    (2, 1),
    (-1, -2),
    (1, -2),
]


# --- PAWN GEOMETRY ---
def pawn_direction(color: Color) -> int:
    """White moves UP the board (towards row 0), black moves DOWN."""
    return -1 if color == Color.WHITE else 1


def pawn_starting_row(color: Color) -> int:
    return BOARD_SIZE - 2 if color == Color.WHITE else 1


def promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else BOARD_SIZE - 1


# --- MOVEMENT RULES ---
def raycasting_move(piece: Piece, board: Board, directions: list[Vector]) -> list[Square]:
    """
    Raycasting algorithm
    -----

    ---
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    The first occupied square found is only included if it holds an opponent's piece: then it can be captured.
    """
    moves: list[Square] = []
    for d_row, d_col in directions:
        target_square = piece.square
        while True:
            target_square = target_square.offset(d_row, d_col)
            if not target_square.is_valid():
                break

            occupant = board.piece_at(target_square)
            if occupant is not None:
                if not occupant.is_same_color(piece):
                    moves.append(target_square)
                break

            moves.append(target_square)
    return moves


def single_step_move(piece: Piece, board: Board, deltas: list[Vector]) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just move a single step along a direction"""
    moves: list[Square] = []
    for d_row, d_col in deltas:
        target_square = piece.square.offset(d_row, d_col)
        if not target_square.is_valid():
            continue

        occupant = board.piece_at(target_square)
        if occupant is None or not occupant.is_same_color(piece):
            moves.append(target_square)
    return moves


def candidate_pawn_moves(pawn: Piece, board: Board) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward, if that square is empty.
    - It can move by two in their first move (so when on their starting row), if both squares are empty
    - takes diagonally
    - takes en passant (see `en_passant_moves()`)
    """
    moves: list[Square] = []
    direction = pawn_direction(pawn.color)

    one_ahead = pawn.square.offset(direction, 0)
    if board.is_empty(one_ahead):
        moves.append(one_ahead)
        two_ahead = pawn.square.offset(2 * direction, 0)
        on_starting_row = pawn.square.row == pawn_starting_row(pawn.color)
        if on_starting_row and board.is_empty(two_ahead):
            moves.append(two_ahead)

    # pawns take diagonally:
    for d_col in (-1, 1):
        target_square = pawn.square.offset(direction, d_col)
        occupant = board.piece_at(target_square)
        if occupant is not None and not occupant.is_same_color(pawn):
            moves.append(target_square)

    moves.extend(en_passant_moves(pawn, board))
    return moves


def candidate_knight_moves(knight: Piece, board: Board) -> list[Square]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(knight, board, KNIGHT_DELTAS)


def candidate_bishop_moves(bishop: Piece, board: Board) -> list[Square]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(bishop, board, DIAGONALS)


def candidate_rook_moves(rook: Piece, board: Board) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(rook, board, STRAIGHTS)


def candidate_queen_moves(queen: Piece, board: Board) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(queen, board, STRAIGHTS + DIAGONALS)


def candidate_king_moves(king: Piece, board: Board) -> list[Square]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a two-column king move, only available while the king never moved.
    """
    moves = single_step_move(king, board, STRAIGHTS + DIAGONALS)
    if not king.moved:
        moves.extend(castling_moves(king, board))
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Piece, Board], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# -- CASTLING MOVES ---
def castling_moves(king: Piece, board: Board) -> list[Square]:
    """
    **you are allowed to castle towards a rook if**

    * That rook exists, has your color and never moved.
    * Every square in between the king and the rook is empty.
    * The king does not land on the square the rook moves to (only possible for a king imported off the e-file).

    NOTE: Whether the king passes through an attacked square is NOT checked here.
    Only the final square gets filtered (by the generic self-check filter of the Board).
    """
    moves: list[Square] = []
    row = king.square.row
    for side, columns in CASTLING_RULES.items():
        rook_square, rook_destination = castling_rook_squares(side, row)
        rook = board.piece_at(rook_square)
        if rook is None or rook.type != PieceType.ROOK:
            continue
        if not rook.is_same_color(king) or rook.moved:
            continue

        path = squares_between_on_row(king.square, rook_square)
        if not all(board.is_empty(square) for square in path):
            continue

        destination = king.square.offset(0, columns.king_step)
        if destination != rook_destination and board.is_empty(destination):
            moves.append(destination)
    return moves


# -- EN PASSANT MOVES ---
def en_passant_moves(pawn: Piece, board: Board) -> list[Square]:
    """
    The Board remembers the square an opponent's pawn skipped over on the previous ply (the en passant target).
    If that pawn now stands right next to ours, we may take it by moving onto the skipped square.
    """
    target = board.en_passant_target
    if target is None:
        return []

    direction = pawn_direction(pawn.color)
    moves: list[Square] = []
    for d_col in (-1, 1):
        side_square = pawn.square.offset(0, d_col)
        neighbour = board.piece_at(side_square)
        if neighbour is None or neighbour.type != PieceType.PAWN:
            continue
        if neighbour.is_same_color(pawn):
            continue

        destination = side_square.offset(direction, 0)
        if destination == target and board.is_empty(destination):
            moves.append(destination)
    return moves
