"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import pytest

from src.engine.game import GameEngine, MoveResult
from src.services.game_service import GameService
from src.services.repository import InMemoryGameRepository
from tests.helpers import CASTLING_FEN, PlayFn, parse_notation


@pytest.fixture
def new_game() -> GameEngine:
    return GameEngine.new_game()


@pytest.fixture
def castling_game() -> GameEngine:
    return GameEngine.from_fen(CASTLING_FEN)


@pytest.fixture
def play() -> PlayFn:
    """Call the inner function with a game and moves in coordinate notation. Every move must be accepted."""

    def _play(game: GameEngine, *moves: str) -> list[MoveResult]:
        results: list[MoveResult] = []
        for notation in moves:
            result = game.apply_move(*parse_notation(notation))
            assert result.accepted, f"{notation} was rejected: {result.rejection}"
            results.append(result)
        return results

    return _play


@pytest.fixture
def repository() -> InMemoryGameRepository:
    """Fresh in-memory repository per test"""
    return InMemoryGameRepository()


@pytest.fixture
def service(repository: InMemoryGameRepository) -> GameService:
    return GameService(repository)
