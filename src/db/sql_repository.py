"""SQLAlchemy implementation of the GameRepository"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameModel
from src.db.schema import DBGame


class SQLGameRepository:
    """One row in the `games` table per game. Every write is committed right away."""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        game_db = self._fetch_game(game_id)
        return self._to_model(game_db) if game_db else None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        new_id = uuid4()
        game_db = DBGame(id=new_id)
        self._copy_state(game, game_db)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        game_db = self._fetch_game(game_id)
        if game_db is None:
            return None
        self._copy_state(game, game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        game_db = self._fetch_game(game_id)
        if game_db is None:
            return None
        deleted = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return deleted

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        return self.db.scalar(select(DBGame).where(DBGame.id == game_id))

    @staticmethod
    def _copy_state(game: GameModel, game_db: DBGame) -> None:
        """Timestamps are maintained by the table defaults"""
        game_db.state = game.state
        game_db.special_move = game.special_move
        game_db.en_passant_square = game.en_passant_square
        game_db.last_captured = game.last_captured

    @staticmethod
    def _to_model(game_db: DBGame) -> GameModel:
        return GameModel(
            state=game_db.state,
            special_move=game_db.special_move,
            en_passant_square=game_db.en_passant_square,
            last_captured=game_db.last_captured,
        )
