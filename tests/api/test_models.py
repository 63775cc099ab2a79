from uuid import UUID, uuid4

import pytest

from src.api.models import (
    CreateGameRequest,
    ImportGameRequest,
    LegalMovesRequest,
    MoveRequest,
)
from src.chess.encoding import STARTING_POSITION
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import PieceType


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateGameRequest --
def test_valid_starting_state() -> None:
    """Test that CreateGameRequest accepts an exported game."""
    request = CreateGameRequest(starting_state=STARTING_POSITION)
    assert request.starting_state == STARTING_POSITION


def test_starting_state_is_optional() -> None:
    """Should be able to not supply a starting state, and validator just returns None."""
    assert CreateGameRequest().starting_state is None
    assert CreateGameRequest(starting_state=None).starting_state is None


@pytest.mark.parametrize("invalid_state", ["PURPLE,Ke1*", "Ke1*,WHITE", ""])
def test_invalid_starting_state(invalid_state: str) -> None:
    """The state has to start with the side to move."""
    with pytest.raises(InvalidRequestError):
        _ = CreateGameRequest(starting_state=invalid_state)


def test_piece_tokens_are_left_to_the_domain() -> None:
    """Only the leading color is checked here"""
    request = CreateGameRequest(starting_state="WHITE,Xx9")
    assert request.starting_state == "WHITE,Xx9"


# -- Validation - MoveRequest --
def test_valid_square_names(mock_id: UUID) -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(game_id=mock_id, from_square="e2", to_square="e4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"
    assert request.promote_to is None


@pytest.mark.parametrize(
    "from_square, to_square",
    [("e9", "e4"), ("e2", "z4"), ("", "e4"), ("e2", "e2e4")],
)
def test_invalid_square_names(mock_id: UUID, from_square: str, to_square: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, from_square=from_square, to_square=to_square)


@pytest.mark.parametrize("choice", ["queen", "rook", "bishop", "knight"])
def test_promotion_choices(mock_id: UUID, choice: str) -> None:
    request = MoveRequest(game_id=mock_id, from_square="a7", to_square="a8", promote_to=choice)
    assert request.promote_to == PieceType(choice)


@pytest.mark.parametrize("choice", ["king", "pawn"])
def test_invalid_promotion(mock_id: UUID, choice: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, from_square="a7", to_square="a8", promote_to=choice)


# -- Validation - other requests --
def test_legal_moves_request(mock_id: UUID) -> None:
    assert LegalMovesRequest(game_id=mock_id, square="g1").square == "g1"
    with pytest.raises(InvalidRequestError):
        _ = LegalMovesRequest(game_id=mock_id, square="g0")


def test_import_request(mock_id: UUID) -> None:
    request = ImportGameRequest(game_id=mock_id, state="black, Ke1*, ke8*")
    assert request.state == "black, Ke1*, ke8*"
    with pytest.raises(InvalidRequestError):
        _ = ImportGameRequest(game_id=mock_id, state="GREEN,Ke1*")
