"""
Type definitions used across layers
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class SpecialMove(StrEnum):
    """Which special rule fired on the most recent move. Values are what observers get to see."""

    CASTLE = "Castle"
    PROMOTION = "Promotion"
    EN_PASSANT = "En Passant"
