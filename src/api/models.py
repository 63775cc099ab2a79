"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.encoding import is_valid_color_token
from src.chess.square import Square
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import PieceType

PROMOTION_CHOICES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)


def _validate_square_name(value: str) -> str:
    if Square.from_algebraic(value) is None:
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value


def _validate_state(value: str) -> str:
    """Only a structural check (leading color token). Piece tokens get parsed by the domain."""
    color_token = "".join(value.split()).split(",")[0]
    if not is_valid_color_token(color_token):
        raise InvalidRequestError(
            f"Game state must start with WHITE or BLACK, got {color_token!r}."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    starting_state: Optional[str] = None

    @field_validator("starting_state")
    @classmethod
    def validate_starting_state(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _validate_state(value)


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


class LegalMovesRequest(BaseModel):
    game_id: UUID
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: str
    to_square: str
    promote_to: Optional[PieceType] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        if value is not None and value not in PROMOTION_CHOICES:
            raise InvalidRequestError(f"A pawn cannot promote to a {value}.")
        return value


class ImportGameRequest(BaseModel):
    game_id: UUID
    state: str

    @field_validator("state")
    @classmethod
    def validate_state(cls, value: str) -> str:
        return _validate_state(value)


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    state: str
    current_player: str
    winner: int
    end_state: Optional[str]
    special_move: Optional[str]
    last_move_type: Optional[str]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    square: str
    legal_moves: list[str]


class MoveResponse(BaseModel):
    accepted: bool
    reason: Optional[str] = None
    game: GameResponse
