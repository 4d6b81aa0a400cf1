"""Orchestration of communication from the presentation / realtime layers to the rules engine (and the reverse direction)."""

import logging
import threading
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    ResetRequest,
    UndoRequest,
)
from src.core.exceptions import (
    GameNotFoundError,
    GameOverError,
    IllegalMoveError,
    NothingToUndoError,
)
from src.core.shared_types import Rejection
from src.engine.game import GameEngine, MoveResult
from src.engine.square import Coordinate
from src.services.repository import GameRepository

logger = logging.getLogger(__name__)


class GameService:
    """
    Orchestration of layers for chess games.

    The engine is not thread safe: every call touching a game runs under that game's lock, so concurrent
    requests for the same game are processed one at a time.
    """

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository
        self._locks: dict[UUID, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # -- Routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        game = (
            GameEngine.from_fen(request.starting_fen)
            if request.starting_fen
            else GameEngine.new_game()
        )
        game_id = self.repo.create_game(game)
        logger.info("created game %s", game_id)
        return self._create_game_response(game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state (used to re-render / re-broadcast)."""
        with self._lock_for(request.game_id):
            game = self._fetch_game(request.game_id)
            return self._create_game_response(request.game_id, game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Destinations to highlight for the selected square."""
        with self._lock_for(request.game_id):
            game = self._fetch_game(request.game_id)
            destinations = game.legal_moves_from(Coordinate.from_algebraic(request.square))
        return LegalMovesResponse(
            game_id=request.game_id,
            square=request.square,
            legal_moves=sorted(square.to_algebraic() for square in destinations),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. Raises if the engine rejects it."""
        from_square, to_square = request.coordinates()
        with self._lock_for(request.game_id):
            game = self._fetch_game(request.game_id)
            result = game.apply_move(from_square, to_square)
            self._raise_if_rejected(result, f"{request.from_square}{request.to_square}")
            return self._create_game_response(request.game_id, game)

    def undo_move(self, request: UndoRequest) -> GameResponse:
        with self._lock_for(request.game_id):
            game = self._fetch_game(request.game_id)
            result = game.undo()
            self._raise_if_rejected(result, "undo")
            return self._create_game_response(request.game_id, game)

    def reset_game(self, request: ResetRequest) -> GameResponse:
        with self._lock_for(request.game_id):
            game = self._fetch_game(request.game_id)
            game.reset()
            return self._create_game_response(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a game (the owning session ended)."""
        try:
            lock = self._lock_for(request.game_id)
        except GameNotFoundError:
            return
        with lock:
            self.repo.delete_game(request.game_id)
        with self._locks_guard:
            self._locks.pop(request.game_id, None)
        logger.info("deleted game %s", request.game_id)

    # -- Internal helpers --
    def _lock_for(self, game_id: UUID) -> threading.Lock:
        """Only games that exist get a lock. Raises GameNotFoundError otherwise."""
        self._fetch_game(game_id)
        with self._locks_guard:
            return self._locks.setdefault(game_id, threading.Lock())

    def _fetch_game(self, game_id: UUID) -> GameEngine:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            # the game may have been deleted while this request waited for its lock
            with self._locks_guard:
                self._locks.pop(game_id, None)
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game

    def _raise_if_rejected(self, result: MoveResult, attempted: str) -> None:
        """The engine returns rejections, the service's callers get exceptions."""
        if result.accepted:
            return
        if result.rejection == Rejection.GAME_OVER:
            raise GameOverError(f"Game is over. status: {result.status}")
        if result.rejection == Rejection.NOTHING_TO_UNDO:
            raise NothingToUndoError("No move to undo.")
        raise IllegalMoveError(f"Move not allowed: {attempted} ({result.rejection})")

    def _create_game_response(self, game_id: UUID, game: GameEngine) -> GameResponse:
        return GameResponse(game_id=game_id, snapshot=game.snapshot())
