"""Unit tests for /src/chess/encoding.py"""

import pytest

from src.chess.encoding import (
    STARTING_POSITION,
    decode_game,
    decode_piece,
    encode_game,
    encode_piece,
    is_valid_color_token,
    is_valid_piece_token,
)
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.exceptions import GameError, MalformedEncodingTokenError
from src.core.shared_types import Color, PieceType


# --- VALIDATION ---
@pytest.mark.parametrize("token", ["Ke1*", "Ke1", "pa7", "Qd1", "nb8", "rh8*", "Pe2*"])
def test_valid_piece_tokens(token: str) -> None:
    assert is_valid_piece_token(token)


@pytest.mark.parametrize(
    "token",
    [
        "",
        "K",
        "Ke",
        "Xe4",  # unknown piece letter
        "Ki9",  # not a square
        "Ke0",
        "Ke1!",  # only '*' may follow the square
        "Ke1**",
        "e1K",
    ],
)
def test_invalid_piece_tokens(token: str) -> None:
    assert not is_valid_piece_token(token)


@pytest.mark.parametrize(
    "token, expected",
    [("WHITE", True), ("black", True), ("PURPLE", False), ("", False)],
)
def test_color_tokens(token: str, expected: bool) -> None:
    assert is_valid_color_token(token) is expected


# --- SINGLE PIECES ---
def test_decode_unmoved_king() -> None:
    piece = decode_piece("Ke1*")
    assert piece.type == PieceType.KING
    assert piece.color == Color.WHITE
    assert piece.square == Square.from_algebraic("e1")
    assert piece.moved is False


@pytest.mark.parametrize("token", ["Ke2", "ra5"])
def test_missing_mark_means_moved(token: str) -> None:
    """Only kings and rooks remember whether they moved"""
    assert decode_piece(token).moved is True


def test_mark_is_meaningless_for_other_pieces() -> None:
    pawn = decode_piece("pe7*")
    assert pawn.color == Color.BLACK
    assert pawn.moved is False
    assert encode_piece(pawn) == "pe7"


@pytest.mark.parametrize("token", ["Ke1*", "Ke2", "ra8*", "ra5", "Pe2", "qd8", "Bc1", "ng8"])
def test_piece_token_survives_decoding(token: str) -> None:
    assert encode_piece(decode_piece(token)) == token


def test_decode_malformed_piece() -> None:
    with pytest.raises(MalformedEncodingTokenError) as error:
        decode_piece("Xe4")
    assert error.value.token == "Xe4"
    assert isinstance(error.value, GameError)


# --- WHOLE GAME ---
def test_decode_starting_position() -> None:
    color, pieces = decode_game(STARTING_POSITION)
    assert color == Color.WHITE
    assert len(pieces) == 32

    by_square = {piece.square.to_algebraic(): piece for piece in pieces}
    assert by_square["e1"].type == PieceType.KING and not by_square["e1"].moved
    assert by_square["h8"].type == PieceType.ROOK and by_square["h8"].color == Color.BLACK
    assert by_square["d8"].type == PieceType.QUEEN
    assert sum(piece.type == PieceType.PAWN for piece in pieces) == 16


def test_encode_game() -> None:
    pieces = [
        Piece.create(PieceType.KING, Color.BLACK, Square.from_algebraic("e8")),
        Piece(PieceType.ROOK, Color.WHITE, Square.from_algebraic("a1"), moved=True),
    ]
    assert encode_game(Color.BLACK, pieces) == "BLACK,ke8*,Ra1"


def test_encode_empty_game() -> None:
    assert encode_game(Color.WHITE, []) == "WHITE"
    assert decode_game("WHITE") == (Color.WHITE, [])


def test_whitespace_is_ignored() -> None:
    color, pieces = decode_game(" black ,\n Ke1* ,\tke8 ")
    assert color == Color.BLACK
    assert [piece.to_token() for piece in pieces] == ["Ke1*", "ke8"]


def test_starting_position_survives_decoding() -> None:
    color, pieces = decode_game(STARTING_POSITION)
    assert encode_game(color, pieces) == STARTING_POSITION


@pytest.mark.parametrize(
    "data, bad_token",
    [
        ("PURPLE,Ke1*", "PURPLE"),
        ("Ke1*,WHITE", "Ke1*"),
        ("WHITE,Ke1*,Zz9", "Zz9"),
        ("WHITE,Ke1*,,ke8*", ""),
    ],
)
def test_decode_malformed_game(data: str, bad_token: str) -> None:
    with pytest.raises(MalformedEncodingTokenError) as error:
        decode_game(data)
    assert error.value.token == bad_token
