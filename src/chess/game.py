"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the board, knows whose turn it is, and translates board queries into the answers outer layers need
(winner codes, end state descriptions, the exported state).
"""

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.board import Board
from src.chess.encoding import STARTING_POSITION, decode_game, decode_piece, encode_game
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.models import GameModel
from src.core.shared_types import Color, PieceType, SpecialMove

# Codes returned by get_winner()
WHITE_WON = 2
BLACK_WON = -2
WHITE_IN_CHECK = 1
BLACK_IN_CHECK = -1
NORMAL = 0


@dataclass(frozen=True)
class GameSnapshot:
    """Opaque copy of everything needed to bring a game back to an earlier moment (for undo/redo collaborators)."""

    board: Board
    color_to_move: Color
    last_captured_piece: Optional[Piece]


@dataclass
class Game:
    board: Board = field(default_factory=Board)
    color_to_move: Color = Color.WHITE
    last_captured_piece: Optional[Piece] = None

    # --- CREATION ---
    @classmethod
    def new_game(cls) -> Self:
        game = cls()
        game.initialize_board()
        return game

    @classmethod
    def from_export(cls, data: str) -> Self:
        game = cls()
        game.import_game(data)
        return game

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        game = cls.from_export(model.state)
        if model.en_passant_square is not None:
            game.board.en_passant_target = Square.from_algebraic(model.en_passant_square)
        if model.special_move is not None:
            game.board.special_move = SpecialMove(model.special_move)
        if model.last_captured is not None:
            game.last_captured_piece = decode_piece(model.last_captured)
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        en_passant = self.board.en_passant_target
        return GameModel(
            state=self.export_game(),
            special_move=self.board.special_move.value if self.board.special_move else None,
            en_passant_square=en_passant.to_algebraic() if en_passant else None,
            last_captured=(
                self.last_captured_piece.to_token() if self.last_captured_piece else None
            ),
        )

    def initialize_board(self) -> None:
        """Standard starting position, white to move."""
        self.import_game(STARTING_POSITION)

    # --- STATE INTERCHANGE ---
    def import_game(self, data: str) -> None:
        """
        Replace the whole placement by the one encoded in data.
        Raises MalformedEncodingTokenError (and leaves the game untouched) when the data cannot be parsed.
        """
        color_to_move, pieces = decode_game(data)
        self.board = Board.from_pieces(pieces)
        self.color_to_move = color_to_move
        self.last_captured_piece = None

    def export_game(self) -> str:
        return encode_game(self.color_to_move, self.board.pieces())

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            board=deepcopy(self.board),
            color_to_move=self.color_to_move,
            last_captured_piece=deepcopy(self.last_captured_piece),
        )

    def restore(self, snapshot: GameSnapshot) -> None:
        """Bring back the complete state in one go. The snapshot itself stays usable (it is copied again)."""
        self.board = deepcopy(snapshot.board)
        self.color_to_move = snapshot.color_to_move
        self.last_captured_piece = deepcopy(snapshot.last_captured_piece)

    # --- QUERIES ---
    def get_piece(self, square: Square) -> Optional[Piece]:
        return self.board.piece_at(square)

    def is_empty(self, square: Square) -> bool:
        """Off-board squares are not empty, same as on the Board"""
        return self.board.is_empty(square)

    def get_current_player(self) -> str:
        return self.color_to_move.name

    def is_piece_same_color(self, square: Square, color: Color) -> bool:
        """Is there a piece of the given color on the square? (False for empty/invalid squares)"""
        piece = self.board.piece_at(square)
        return piece is not None and piece.color == color

    def get_possible_moves(self, square: Square) -> list[Square]:
        """Legal destinations of the piece on the square. Empty list for an empty or invalid square."""
        if not square.is_valid():
            return []
        return self.board.legal_moves(square)

    def can_make_move(self, from_square: Square, to_square: Square) -> bool:
        return self.board.is_legal_move(from_square, to_square)

    @property
    def special_move(self) -> Optional[SpecialMove]:
        return self.board.special_move

    @property
    def move_type(self) -> Optional[str]:
        """'Capture' if the most recent move took a piece"""
        return "Capture" if self.last_captured_piece is not None else None

    # --- MAKING A MOVE ---
    def make_move(
        self,
        from_square: Square,
        to_square: Square,
        promote_to: Optional[PieceType] = None,
    ) -> bool:
        """
        Attempt to make a move
        -----

        On success the turn passes to the other player. On failure nothing changes.
        NOTE: Whose turn it is does not restrict which pieces may move here. Outer layers check that.
        """
        if not self.board.is_legal_move(from_square, to_square):
            return False

        captured = self._piece_captured_by(from_square, to_square)
        self.board.execute_move(from_square, to_square, promote_to or PieceType.QUEEN)
        self.last_captured_piece = captured
        self.color_to_move = self.color_to_move.opponent
        return True

    def _piece_captured_by(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Snapshot of the piece that is about to get captured (if any), before the board is updated."""
        occupant = self.board.piece_at(to_square)
        if occupant is not None:
            return occupant

        # en passant: the pawn taken is not on the target square, but next to the pawn moving
        moving_piece = self.board.piece_at(from_square)
        if moving_piece and moving_piece.type == PieceType.PAWN and from_square.col != to_square.col:
            return self.board.piece_at(Square(from_square.row, to_square.col))
        return None

    # --- END CONDITIONS ---
    def get_winner(self) -> int:
        """
        2/-2: white/black won, 1/-1: white/black in check, 0: nothing special.
        Only the player to move can be mated or in check.
        """
        to_move = self.color_to_move
        if self.board.is_checkmate(to_move):
            return WHITE_WON if to_move == Color.BLACK else BLACK_WON
        if self.board.is_check(PieceType.KING, to_move):
            return WHITE_IN_CHECK if to_move == Color.WHITE else BLACK_IN_CHECK
        return NORMAL

    def get_end_state(self) -> Optional[str]:
        """Human readable version of get_winner (plus stalemate). None while the game just goes on."""
        to_move = self.color_to_move
        if self.board.is_stalemate():
            return "Stalemate"
        if self.board.is_checkmate(to_move):
            return f"{to_move.opponent.name.capitalize()} Won"
        if self.board.is_check(PieceType.KING, to_move):
            return f"{to_move.name.capitalize()} is in Check"
        return None

    def __str__(self) -> str:
        return f"Current turn: {self.get_current_player()}\n{self.board}"
