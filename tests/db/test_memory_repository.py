"""Unit tests for src/db/memory_repository.py"""

import threading
import time
from dataclasses import replace

import pytest

from src.chess.game_state import GameState
from src.core.exceptions import GameNotFoundError
from src.core.shared_types import Color
from src.db.memory_repository import InMemoryGameRepository


def test_create_game(repository: InMemoryGameRepository) -> None:
    """The repository hands out the game ID and stores the game under it."""
    stored, game_id = repository.create_game(GameState(game_id=""))
    assert stored.game_id == game_id
    assert repository.get_game(game_id) == stored
    assert repository.version(game_id) == 0


def test_game_ids_are_unique(repository: InMemoryGameRepository) -> None:
    ids = {repository.create_game(GameState(game_id=""))[1] for _ in range(20)}
    assert len(ids) == 20


def test_get_unknown_game(repository: InMemoryGameRepository) -> None:
    """Should return None if ID does not match anything in the repository."""
    assert repository.get_game("no-such-game") is None
    assert repository.version("no-such-game") is None


def test_update_game(repository: InMemoryGameRepository) -> None:
    stored, game_id = repository.create_game(GameState(game_id=""))
    updated = replace(stored, turn_color=Color.BLACK)

    assert repository.update_game(game_id, updated) is updated
    assert repository.get_game(game_id) is updated
    assert repository.version(game_id) == 1


def test_update_unknown_game(repository: InMemoryGameRepository) -> None:
    assert repository.update_game("no-such-game", GameState(game_id="no-such-game")) is None


def test_delete_game(repository: InMemoryGameRepository) -> None:
    stored, game_id = repository.create_game(GameState(game_id=""))
    assert repository.delete_game(game_id) == stored
    assert repository.get_game(game_id) is None
    assert repository.delete_game(game_id) is None


def test_wait_returns_at_once_when_version_differs(repository: InMemoryGameRepository) -> None:
    stored, game_id = repository.create_game(GameState(game_id=""))
    repository.update_game(game_id, stored)

    start = time.monotonic()
    assert repository.wait_for_change(game_id, since_version=0, timeout=5) == 1
    assert time.monotonic() - start < 1


def test_wait_times_out(repository: InMemoryGameRepository) -> None:
    _, game_id = repository.create_game(GameState(game_id=""))
    assert repository.wait_for_change(game_id, since_version=0, timeout=0.05) == 0


def test_wait_wakes_up_on_update(repository: InMemoryGameRepository) -> None:
    stored, game_id = repository.create_game(GameState(game_id=""))
    timer = threading.Timer(0.05, repository.update_game, args=(game_id, stored))
    timer.start()
    try:
        assert repository.wait_for_change(game_id, since_version=0, timeout=5) == 1
    finally:
        timer.join()


def test_wait_wakes_up_on_delete(repository: InMemoryGameRepository) -> None:
    _, game_id = repository.create_game(GameState(game_id=""))
    timer = threading.Timer(0.05, repository.delete_game, args=(game_id,))
    timer.start()
    try:
        assert repository.wait_for_change(game_id, since_version=0, timeout=5) is None
    finally:
        timer.join()


def test_lock_serialises_access(repository: InMemoryGameRepository) -> None:
    """While one caller holds the game lock, another caller for the same game has to wait."""
    _, game_id = repository.create_game(GameState(game_id=""))
    events: list[str] = []
    holding = threading.Event()

    def second_caller() -> None:
        holding.wait()
        with repository.lock(game_id):
            events.append("second")

    thread = threading.Thread(target=second_caller)
    thread.start()
    with repository.lock(game_id):
        holding.set()
        time.sleep(0.05)
        events.append("first")
    thread.join()

    assert events == ["first", "second"]


def test_locks_are_per_game(repository: InMemoryGameRepository) -> None:
    _, first_id = repository.create_game(GameState(game_id=""))
    _, second_id = repository.create_game(GameState(game_id=""))
    with repository.lock(first_id):
        acquired = threading.Event()

        def other_game() -> None:
            with repository.lock(second_id):
                acquired.set()

        thread = threading.Thread(target=other_game)
        thread.start()
        thread.join(timeout=1)
        assert acquired.is_set()


def test_lock_unknown_game(repository: InMemoryGameRepository) -> None:
    """Asking for the lock of an unknown game does not leave a lock behind."""
    for i in range(100):
        with pytest.raises(GameNotFoundError):
            with repository.lock(f"unknown-{i}"):
                pass
    assert repository._game_locks == {}


def test_lock_deleted_game(repository: InMemoryGameRepository) -> None:
    _, game_id = repository.create_game(GameState(game_id=""))
    repository.delete_game(game_id)
    with pytest.raises(GameNotFoundError):
        with repository.lock(game_id):
            pass
    assert repository._game_locks == {}
