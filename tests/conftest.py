"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator, Optional

import pytest

from src.chess.castling import CastlingRights
from src.chess.game_state import GameState
from src.core.shared_types import Color
from src.db.memory_repository import InMemoryGameRepository

WHITE_PLAYER = "white-player"
BLACK_PLAYER = "black-player"

StateFactory = Callable[..., GameState]


def _seated_state(
    placement: str,
    turn_color: Color = Color.WHITE,
    castling_rights: Optional[CastlingRights] = None,
) -> GameState:
    state = GameState.from_fen(
        "test-game", placement, turn_color=turn_color, castling_rights=castling_rights
    )
    return state.with_player(Color.WHITE, WHITE_PLAYER).with_player(Color.BLACK, BLACK_PLAYER)


@pytest.fixture
def make_state() -> StateFactory:
    """
    Factory for a game in an arbitrary position (FEN piece placement) with both seats taken.
    Player IDs are "white-player" and "black-player". Castling rights default to none.
    """
    return _seated_state


@pytest.fixture
def started_game() -> GameState:
    """Standard starting position, both players seated."""
    return GameState(
        game_id="test-game", white_player_id=WHITE_PLAYER, black_player_id=BLACK_PLAYER
    )


@pytest.fixture
def repository() -> Generator[InMemoryGameRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = InMemoryGameRepository()
    try:
        yield repo
    finally:
        repo.clear()
