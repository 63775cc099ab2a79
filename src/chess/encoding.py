"""
Textual interchange format of a game: the side to move plus the placement of every piece.
----

<WHITE|BLACK>,<piece>,<piece>,...

Every piece token reads <letter><file><rank>[*]
* the letter identifies the piece type (k, q, r, b, n, p). Capital letters for the white pieces, small letters for the black pieces.
* file + rank is the square in algebraic notation
* a trailing '*' marks a king or rook that has never moved (so castling is still possible with it)

ex) The standard starting position is exported as (line breaks added for readability)
WHITE,ra8*,nb8,bc8,qd8,ke8*,bf8,ng8,rh8*,pa7,pb7,pc7,pd7,pe7,pf7,pg7,ph7,
Pa2,Pb2,Pc2,Pd2,Pe2,Pf2,Pg2,Ph2,Ra1*,Nb1,Bc1,Qd1,Ke1*,Bf1,Ng1,Rh1*

NOTE: This is a placement loader, not a validator. Positions without kings, with pawns on the last row etc. are accepted.
"""

import re
from typing import Iterable

from src.chess.pieces import LETTER_TO_PIECE, TRACKS_MOVED, Piece
from src.chess.square import Square
from src.core.exceptions import MalformedEncodingTokenError
from src.core.shared_types import Color

STARTING_POSITION = (
    "WHITE,"
    "ra8*,nb8,bc8,qd8,ke8*,bf8,ng8,rh8*,"
    "pa7,pb7,pc7,pd7,pe7,pf7,pg7,ph7,"
    "Pa2,Pb2,Pc2,Pd2,Pe2,Pf2,Pg2,Ph2,"
    "Ra1*,Nb1,Bc1,Qd1,Ke1*,Bf1,Ng1,Rh1*"
)

COLOR_TOKENS: dict[str, Color] = {"WHITE": Color.WHITE, "BLACK": Color.BLACK}
UNMOVED_MARK = "*"

_WHITESPACE = re.compile(r"\s+")


# --- VALIDATION ---
def is_valid_piece_token(token: str) -> bool:
    """Letter of a known piece type + a square on the board + optionally the unmoved mark."""
    if len(token) not in (3, 4):
        return False
    if token[0].lower() not in LETTER_TO_PIECE:
        return False
    if Square.from_algebraic(token[1:3]) is None:
        return False
    return len(token) == 3 or token[3] == UNMOVED_MARK


def is_valid_color_token(token: str) -> bool:
    return token.upper() in COLOR_TOKENS


# --- SINGLE PIECES ---
def encode_piece(piece: Piece) -> str:
    return piece.to_token()


def decode_piece(token: str) -> Piece:
    """
    Parse a single piece token
    ----

    A king or rook without the unmoved mark has moved before. For all other pieces the mark carries no information.
    """
    if not is_valid_piece_token(token):
        raise MalformedEncodingTokenError(token, "expected <letter><file><rank>[*]")

    letter = token[0]
    color = Color.WHITE if letter.isupper() else Color.BLACK
    piece_type = LETTER_TO_PIECE[letter.lower()]
    square = Square.from_algebraic(token[1:3])
    assert square is not None

    piece = Piece.create(piece_type, color, square)
    if piece_type in TRACKS_MOVED and not token.endswith(UNMOVED_MARK):
        piece.mark_moved()
    return piece


# --- WHOLE GAME ---
def encode_game(color_to_move: Color, pieces: Iterable[Piece]) -> str:
    """Side to move first, then the pieces in the order given (the Board hands them out from a8 to h1)"""
    tokens = [color_to_move.name] + [encode_piece(piece) for piece in pieces]
    return ",".join(tokens)


def decode_game(data: str) -> tuple[Color, list[Piece]]:
    """Reverse operation: all whitespace (incl. line breaks) is ignored."""
    data = _WHITESPACE.sub("", data)
    color_token, *piece_tokens = data.split(",")

    if not is_valid_color_token(color_token):
        raise MalformedEncodingTokenError(color_token, "expected WHITE or BLACK")
    color_to_move = COLOR_TOKENS[color_token.upper()]

    # a game without any piece is exported as just the color token
    pieces = [decode_piece(token) for token in piece_tokens]
    return color_to_move, pieces
