"""The Game board implements all rules that affect the `position` (in chess: the configuration of pieces on the board)"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Self

from src.chess.castling import castling_rook_squares, castling_side
from src.chess.moves import MOVEMENT_RULES, CandidateMovesFn, pawn_direction, promotion_row
from src.chess.pieces import PROMOTION_OPTIONS, Piece
from src.chess.square import BOARD_SIZE, Square
from src.core.exceptions import IllegalMoveError, InvalidSquareError, NoPieceAtSourceError
from src.core.shared_types import Color, PieceType, SpecialMove

Grid = list[list[Optional[Piece]]]


def empty_grid() -> Grid:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass
class Board:
    """
    8x8 grid of (optional) pieces. grid[row][col], where grid[0][0] is a8 and grid[7][7] is h1.

    Next to the placement, the board remembers two things about the most recent move:
    * en_passant_target: the square a pawn skipped over with a double step (only during the very next ply)
    * special_move: which special rule fired (castle, promotion, en passant), or None for an ordinary move
    """

    grid: Grid = field(default_factory=empty_grid)
    en_passant_target: Optional[Square] = None
    special_move: Optional[SpecialMove] = None

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> Self:
        board = cls()
        for piece in pieces:
            board.place_piece(piece, piece.square)
        return board

    # --- PLACEMENT ---
    def piece_at(self, square: Square) -> Optional[Piece]:
        """Invalid squares simply hold nothing"""
        if not square.is_valid():
            return None
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        """True if the square is on the board and nothing stands on it"""
        return square.is_valid() and self.piece_at(square) is None

    def has_enemy(self, from_square: Square, to_square: Square) -> bool:
        """Is there a piece on to_square of the other color than the one on from_square?"""
        piece = self.piece_at(from_square)
        other = self.piece_at(to_square)
        return piece is not None and other is not None and not other.is_same_color(piece)

    def place_piece(self, piece: Piece, square: Square) -> None:
        """Put the piece on the square (replacing whatever was there). Keeps the piece's own square in sync."""
        if not square.is_valid():
            raise InvalidSquareError(f"Cannot place {piece} on {square}: not on the board.")
        self.grid[square.row][square.col] = piece
        piece.square = square

    def remove_piece(self, square: Square) -> Optional[Piece]:
        piece = self.piece_at(square)
        if piece is not None:
            self.grid[square.row][square.col] = None
        return piece

    def clear(self) -> None:
        self.grid = empty_grid()
        self.en_passant_target = None
        self.special_move = None

    def pieces(self, color: Optional[Color] = None) -> list[Piece]:
        """All pieces (of a given color), read from top-left (a8) to bottom-right (h1)"""
        return [
            piece
            for row in self.grid
            for piece in row
            if piece is not None and (color is None or piece.color == color)
        ]

    def find_piece(self, piece_type: PieceType, color: Color) -> Optional[Square]:
        """Square of the first piece of this type and color. NOTE: assumes exactly one king per side for check detection."""
        for piece in self.pieces(color):
            if piece.type == piece_type:
                return piece.square
        return None

    # --- MOVE GENERATION ---
    def pseudo_legal_moves(self, square: Square) -> list[Square]:
        """Destinations following the movement rules, without caring about your own king"""
        piece = self.piece_at(square)
        if piece is None:
            return []
        movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.type]
        return movement_rule(piece, self)

    def legal_moves(self, square: Square) -> list[Square]:
        """Pseudo-legal moves minus the ones that would leave your own king in check"""
        return [
            to_square
            for to_square in self.pseudo_legal_moves(square)
            if not self.is_next_move_check(square, to_square)
        ]

    def is_legal_move(self, from_square: Square, to_square: Square) -> bool:
        if not (from_square.is_valid() and to_square.is_valid()):
            return False
        return to_square in self.legal_moves(from_square)

    def is_next_move_check(self, from_square: Square, to_square: Square) -> bool:
        """
        Would moving the piece on from_square to to_square leave its own king attacked?

        plan:
        1. move the piece there (taking away anything standing on the target square)
        2. determine if the king is in check now
        3. put everything back exactly where it was
        """
        if not (from_square.is_valid() and to_square.is_valid()):
            return False
        piece = self.piece_at(from_square)
        if piece is None:
            return False
        with self._hypothetical_move(piece, to_square):
            return self.is_check(PieceType.KING, piece.color)

    @contextmanager
    def _hypothetical_move(self, piece: Piece, to_square: Square) -> Iterator[None]:
        """Relocate a piece for the duration of the block. The board is restored even if the block raises."""
        from_square = piece.square
        occupant = self.piece_at(to_square)
        self.remove_piece(from_square)
        self.place_piece(piece, to_square)
        try:
            yield
        finally:
            self.remove_piece(to_square)
            self.place_piece(piece, from_square)
            if occupant is not None:
                self.place_piece(occupant, to_square)

    def validate_move(self, from_square: Square, to_square: Square) -> Piece:
        """Same checks as execute_move, but tells you what is wrong. Returns the piece that would move."""
        if not from_square.is_valid():
            raise InvalidSquareError(f"Square {from_square} is not on the board.")
        if not to_square.is_valid():
            raise InvalidSquareError(f"Square {to_square} is not on the board.")

        piece = self.piece_at(from_square)
        if piece is None:
            raise NoPieceAtSourceError(f"No piece to move on {from_square}.")

        if to_square not in self.legal_moves(from_square):
            raise IllegalMoveError(f"Move not allowed: {piece} to {to_square}")
        return piece

    # --- MOVE EXECUTION ---
    def execute_move(
        self,
        from_square: Square,
        to_square: Square,
        promote_to: PieceType = PieceType.QUEEN,
    ) -> bool:
        """
        Move a piece, applying all rules
        -----

        1. refuse (False) if a square is invalid, there is no piece, or the destination is not legal
        2. en passant: pawn moving diagonally onto an empty square takes the pawn behind the destination
        3. relocate the piece (it is now marked as moved)
        4. castling: a king moving two columns drags the rook along
        5. promotion: a pawn reaching the far row gets replaced (a queen unless told otherwise)
        """
        if not self.is_legal_move(from_square, to_square):
            return False
        piece = self.piece_at(from_square)
        assert piece is not None

        self.special_move = None
        is_pawn = piece.type == PieceType.PAWN

        if is_pawn and from_square.col != to_square.col and self.is_empty(to_square):
            self._take_en_passant(piece, to_square)

        self.remove_piece(from_square)
        self.place_piece(piece, to_square)
        piece.mark_moved()

        if piece.type == PieceType.KING:
            self._castle_rook_if_needed(from_square, to_square)

        if is_pawn and to_square.row == promotion_row(piece.color):
            self.promote_pawn(to_square, promote_to)
            self.special_move = SpecialMove.PROMOTION

        self.en_passant_target = self._determine_en_passant_target(
            piece, from_square, to_square
        )
        return True

    def promote_pawn(self, square: Square, new_type: PieceType = PieceType.QUEEN) -> None:
        """Replace the pawn by a new piece of the same color. Anything that cannot be promoted into becomes a queen."""
        pawn = self.piece_at(square)
        if pawn is None or pawn.type != PieceType.PAWN:
            return
        if new_type not in PROMOTION_OPTIONS:
            new_type = PieceType.QUEEN
        promoted = Piece.create(new_type, pawn.color, square)
        promoted.mark_moved()
        self.place_piece(promoted, square)

    def _take_en_passant(self, pawn: Piece, to_square: Square) -> None:
        """The pawn taken stands one row behind the destination (seen from the moving pawn)"""
        captured_square = to_square.offset(-pawn_direction(pawn.color), 0)
        self.remove_piece(captured_square)
        self.special_move = SpecialMove.EN_PASSANT

    def _castle_rook_if_needed(self, from_square: Square, to_square: Square) -> None:
        side = castling_side(from_square, to_square)
        if side is None:
            return
        rook_from, rook_to = castling_rook_squares(side, from_square.row)
        rook = self.remove_piece(rook_from)
        if rook is not None:
            self.place_piece(rook, rook_to)
            rook.mark_moved()
        self.special_move = SpecialMove.CASTLE

    def _determine_en_passant_target(
        self, piece: Piece, from_square: Square, to_square: Square
    ) -> Optional[Square]:
        """The possible en passant square for the next ply: the square a pawn just skipped over."""
        if piece.type != PieceType.PAWN or abs(to_square.row - from_square.row) != 2:
            return None
        return Square((from_square.row + to_square.row) // 2, from_square.col)

    # --- CHECK / CHECKMATE / STALEMATE ---
    def is_check(self, piece_type: PieceType, color: Color) -> bool:
        """Can any piece of the opponent reach the (unique) piece of this type and color?"""
        target = self.find_piece(piece_type, color)
        if target is None:
            return False
        for piece in self.pieces(color.opponent):
            if target in self.pseudo_legal_moves(piece.square):
                return True
        return False

    def is_checkmate(self, color: Color) -> bool:
        """
        True when no piece of this color has a single legal move left.
        NOTE: Does not require the king to be in check (see DESIGN.md).
        """
        for piece in self.pieces(color):
            if self.legal_moves(piece.square):
                return False
        return True

    def is_stalemate(self) -> bool:
        """Both sides are out of legal moves at the same time"""
        return self.is_checkmate(Color.WHITE) and self.is_checkmate(Color.BLACK)

    def __str__(self) -> str:
        """Plain text diagram, one row per line. Empty squares are dots."""
        lines = []
        for row in self.grid:
            cells = [piece.to_token().ljust(4) if piece else ".   " for piece in row]
            lines.append(" ".join(cells).rstrip())
        return "\n".join(lines)
