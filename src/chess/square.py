"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Chess board is always 8x8. No variants with other sizes.
BOARD_SIZE = 8

FILE_NAMES = "abcdefgh"
RANK_NAMES = "12345678"


@dataclass(frozen=True)
class Square:
    """
    Row/column pair as seen from white's side of the board:
    row 0 is the 8th rank (top), row 7 the 1st rank. Column 0 is the a-file.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Optional[Square]:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7). Anything malformed gives None."""
        if len(sq) != 2:
            return None
        file_char, rank_char = sq[0], sq[1]
        if file_char not in FILE_NAMES or rank_char not in RANK_NAMES:
            return None
        return cls(BOARD_SIZE - int(rank_char), FILE_NAMES.index(file_char))

    def to_algebraic(self) -> Optional[str]:
        if not self.is_valid():
            return None
        return f"{FILE_NAMES[self.col]}{BOARD_SIZE - self.row}"

    def is_valid(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def offset(self, d_row: int, d_col: int) -> Square:
        """The square displaced by the given vector. Might end up off the board: check with is_valid()."""
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return self.to_algebraic() or f"[{self.row}, {self.col}]"
