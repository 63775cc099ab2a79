"""Defines the chess pieces"""

from dataclasses import dataclass
from typing import Self

from src.chess.square import Square
from src.core.shared_types import Color, PieceType

LETTER_TO_PIECE: dict[str, PieceType] = {
    "k": PieceType.KING,
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
    "p": PieceType.PAWN,
}

PIECE_TO_LETTER: dict[PieceType, str] = {
    value: key for key, value in LETTER_TO_PIECE.items()
}

# Only these two care about ever having moved (castling rights). Exported with a trailing '*' while unmoved.
TRACKS_MOVED: tuple[PieceType, ...] = (PieceType.KING, PieceType.ROOK)

PROMOTION_OPTIONS: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass
class Piece:
    type: PieceType
    color: Color
    square: Square
    moved: bool = False

    @classmethod
    def create(cls, piece_type: PieceType, color: Color, square: Square) -> Self:
        """Factory for a fresh (never moved) piece"""
        return cls(piece_type, color, square)

    @property
    def letter(self) -> str:
        # upper case: White pieces, lower case: Black pieces
        letter = PIECE_TO_LETTER[self.type]
        return letter.upper() if self.color == Color.WHITE else letter

    def is_same_color(self, other: "Piece | Color") -> bool:
        color = other.color if isinstance(other, Piece) else other
        return self.color == color

    def mark_moved(self) -> None:
        """Once moved, a piece stays moved. There is no way back."""
        self.moved = True

    def to_token(self) -> str:
        """<letter><file><rank>, plus '*' for a king/rook that never moved. ex: 'Ke1*', 'pd5'"""
        unmoved_mark = "*" if (self.type in TRACKS_MOVED and not self.moved) else ""
        return f"{self.letter}{self.square.to_algebraic()}{unmoved_mark}"

    def __str__(self) -> str:
        return self.to_token()
