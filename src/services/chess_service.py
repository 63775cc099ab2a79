"""Orchestration of communication from API models to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    ImportGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
)
from src.chess.game import BLACK_WON, WHITE_WON, Game
from src.chess.square import Square
from src.core.exceptions import GameError, NotYourTurnError, RepositoryError
from src.core.models import GameModel
from src.db.repository import GameRepository
from src.services.events import (
    EventBus,
    GameCreated,
    GameDeleted,
    GameEnded,
    GameImported,
    MoveMade,
    MoveRejected,
)

_LOGGER = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(
        self,
        repository: GameRepository,
        bus: Optional[EventBus] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.repo = repository
        self.bus = bus or EventBus()
        self.logger = logger or _LOGGER

    # -- Service operations ---
    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Start a game, from the standard position unless a starting state is supplied."""
        game = (
            Game.from_export(request.starting_state)
            if request.starting_state
            else Game.new_game()
        )
        stored_game, game_id = self.repo.create_game(game.to_model())

        self.logger.info("Game %s started.", game_id)
        self.bus.emit(GameCreated(game_id=game_id, state=stored_game.state))
        return self._create_game_response(game_id, game)

    def get_game(self, request: GetGameRequest) -> GameResponse:
        game = Game.from_model(self._fetch_game(request.game_id))
        return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Where can the piece on the requested square go? (Empty for an empty square)"""
        game = Game.from_model(self._fetch_game(request.game_id))
        square = self._parse_square(request.square)
        moves = game.get_possible_moves(square)
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            legal_moves=[str(move) for move in moves],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        A refused move is a normal outcome (clicked the wrong square, opponent's piece, ...):
        the stored game stays as it was and the response explains why.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        from_square = self._parse_square(request.from_square)
        to_square = self._parse_square(request.to_square)

        try:
            self._validate_move(game, from_square, to_square)
        except GameError as error:
            self.logger.warning(
                "Invalid move %s -> %s in game %s: %s",
                request.from_square,
                request.to_square,
                request.game_id,
                error,
            )
            self.bus.emit(
                MoveRejected(
                    game_id=request.game_id,
                    from_square=request.from_square,
                    to_square=request.to_square,
                    reason=str(error),
                )
            )
            return MoveResponse(
                accepted=False,
                reason=str(error),
                game=self._create_game_response(request.game_id, game),
            )

        game.make_move(from_square, to_square, request.promote_to)
        after_move = game.to_model()
        self.repo.update_game(request.game_id, after_move)

        self.logger.info(
            "Move %s -> %s made in game %s.",
            request.from_square,
            request.to_square,
            request.game_id,
        )
        self.bus.emit(
            MoveMade(
                game_id=request.game_id,
                from_square=request.from_square,
                to_square=request.to_square,
                special_move=after_move.special_move,
                captured=after_move.last_captured,
                state=after_move.state,
            )
        )
        response = self._create_game_response(request.game_id, game)
        self._announce_end_state(request.game_id, response)
        return MoveResponse(accepted=True, game=response)

    def import_game(self, request: ImportGameRequest) -> GameResponse:
        """
        Replace the placement of an existing game by the supplied state.
        MalformedEncodingTokenError propagates to the caller; the stored game is not touched in that case.
        """
        stored_model = self._fetch_game(request.game_id)
        game = Game.from_export(request.state)
        self.repo.update_game(request.game_id, game.to_model())

        self.logger.info("Game %s imported via text.", request.game_id)
        self.bus.emit(
            GameImported(
                game_id=request.game_id,
                old_state=stored_model.state,
                new_state=game.export_game(),
            )
        )
        return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise RepositoryError(f"Game with game_id={request.game_id} not found.")
        self.bus.emit(GameDeleted(game_id=request.game_id))

    # -- Internal helpers --
    def _validate_move(self, game: Game, from_square: Square, to_square: Square) -> None:
        """Raises the reason a move cannot be made. Turn order is checked before the rules of the board."""
        piece = game.get_piece(from_square)
        if piece is not None and piece.color != game.color_to_move:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {game.get_current_player()} to make a move first."
            )
        game.board.validate_move(from_square, to_square)

    def _announce_end_state(self, game_id: UUID, response: GameResponse) -> None:
        """Check is only logged. Once a side is out of moves the game has ended."""
        if response.end_state is None:
            return
        self.logger.info("End state of game %s: %s", game_id, response.end_state)
        if response.winner in (WHITE_WON, BLACK_WON):
            self.bus.emit(GameEnded(game_id=game_id, end_state=response.end_state))

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            state=game.export_game(),
            current_player=game.get_current_player(),
            winner=game.get_winner(),
            end_state=game.get_end_state(),
            special_move=game.special_move.value if game.special_move else None,
            last_move_type=game.move_type,
        )

    @staticmethod
    def _parse_square(name: str) -> Square:
        """Request models already validated the name."""
        square = Square.from_algebraic(name)
        assert square is not None
        return square

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
