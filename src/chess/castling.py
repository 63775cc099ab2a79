"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.chess.square import Square


class CastlingSide(Enum):
    KING_SIDE = "king side"
    QUEEN_SIDE = "queen side"


@dataclass(frozen=True)
class CastlingColumns:
    """
    Columns involved in castling towards one side. The row is whatever row the king stands on.
    NOTE: The king always travels two columns, the rook jumps over it to the square the king passed.
    """

    king_step: int
    rook_from: int
    rook_to: int


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingSide, CastlingColumns] = {
    CastlingSide.KING_SIDE: CastlingColumns(king_step=2, rook_from=7, rook_to=5),
    CastlingSide.QUEEN_SIDE: CastlingColumns(king_step=-2, rook_from=0, rook_to=3),
}


def castling_side(from_square: Square, to_square: Square) -> Optional[CastlingSide]:
    """Which side a king move castles towards (None if it is not a two-column king move)."""
    if from_square.row != to_square.row:
        return None
    for side, columns in CASTLING_RULES.items():
        if to_square.col - from_square.col == columns.king_step:
            return side
    return None


def castling_rook_squares(side: CastlingSide, row: int) -> tuple[Square, Square]:
    columns = CASTLING_RULES[side]
    return Square(row, columns.rook_from), Square(row, columns.rook_to)


def squares_between_on_row(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares strictly in between the two squares specified that are on the same row

    Needed for checking if you can still castle (the caller will check which of those are empty etc.)
    """

    if from_square.row != to_square.row:
        raise ValueError(
            f"squares_between_on_row requires both squares to lie on the same row. \n from: {from_square}\n to:{to_square}"
        )

    step = 1 if to_square.col > from_square.col else -1
    return [
        Square(from_square.row, col)
        for col in range(from_square.col + step, to_square.col, step)
    ]
