"""
What crosses the service boundary.

The service stores and loads GameModels through the repository and builds a Game from them, so neither the
database rows nor the domain objects leak into the other layers.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameModel:
    """
    Transport-safe representation of a chess game used between API, Service, DB, and Game layers.

    * state: the exported placement, ex. "WHITE,Ke1*,ke8*,Ra1*"
    * special_move: tag of the most recent move ("Castle", "Promotion", "En Passant") or None
    * en_passant_square: algebraic name of the square a pawn just skipped over, or None
    * last_captured: token of the piece captured by the most recent move, or None
    """

    state: str
    special_move: Optional[str] = None
    en_passant_square: Optional[str] = None
    last_captured: Optional[str] = None
