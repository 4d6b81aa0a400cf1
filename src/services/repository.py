"""Protocol repository: where the service keeps its running games"""

from typing import Protocol
from uuid import UUID, uuid4

from src.engine.game import GameEngine


class GameRepository(Protocol):
    """Game instance storage orchestration"""

    def get_game(self, game_id: UUID) -> GameEngine | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameEngine) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> GameEngine | None:
        """Remove a game."""
        ...


class InMemoryGameRepository:
    """Running games live in a dictionary for as long as the process (the owning session) does."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameEngine] = {}

    def get_game(self, game_id: UUID) -> GameEngine | None:
        return self._games.get(game_id)

    def create_game(self, game: GameEngine) -> UUID:
        game_id = uuid4()
        self._games[game_id] = game
        return game_id

    def delete_game(self, game_id: UUID) -> GameEngine | None:
        return self._games.pop(game_id, None)

    def __len__(self) -> int:
        return len(self._games)
