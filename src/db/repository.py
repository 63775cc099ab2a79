"""Where games live between requests. The service only knows this Protocol (SQLAlchemy version in sql_repository.py)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """
    Stores GameModels (the exported placement plus the bits of state the text format leaves out) under a UUID.

    Lookups of unknown ids answer None, the service decides whether that is an error.
    """

    def get_game(self, game_id: UUID) -> GameModel | None: ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """The repository hands out the id of the new record."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the stored state after a move or an import."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Returns what was stored, so callers can tell an unknown id apart."""
        ...
