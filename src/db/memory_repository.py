"""Implementation of (Game)Repository that keeps the games in process memory"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from uuid import uuid4

from src.chess.game_state import GameState
from src.core.exceptions import GameNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class StoredGame:
    state: GameState
    version: int = 0


class InMemoryGameRepository:
    """
    Games stored in a dictionary.
    ----

    * One lock per game ID serialises the operations of the Service on that game.
    * A condition variable wakes up the callers waiting for a game to change (long polling).
    """

    def __init__(self) -> None:
        self._games: dict[str, StoredGame] = {}
        self._game_locks: dict[str, threading.Lock] = {}
        self._changed = threading.Condition()

    def get_game(self, game_id: str) -> GameState | None:
        """Get game by ID, if record exists."""
        with self._changed:
            record = self._games.get(game_id)
            return record.state if record else None

    def create_game(self, game: GameState) -> tuple[GameState, str]:
        """Store new game and return the stored data + newly created game ID."""
        with self._changed:
            new_id = uuid4().hex
            while new_id in self._games:
                new_id = uuid4().hex
            stored = replace(game, game_id=new_id)
            self._games[new_id] = StoredGame(stored)
            self._game_locks[new_id] = threading.Lock()
        logger.debug("Stored new game %s", new_id)
        return stored, new_id

    def update_game(self, game_id: str, game: GameState) -> GameState | None:
        """Replace the state of an existing record and wake up everyone waiting on it."""
        with self._changed:
            record = self._games.get(game_id)
            if record is None:
                return None
            record.state = game
            record.version += 1
            self._changed.notify_all()
            return record.state

    def delete_game(self, game_id: str) -> GameState | None:
        """Remove a game's record."""
        with self._changed:
            record = self._games.pop(game_id, None)
            self._game_locks.pop(game_id, None)
            self._changed.notify_all()
        if record is None:
            return None
        logger.debug("Deleted game %s", game_id)
        return record.state

    @contextmanager
    def lock(self, game_id: str) -> Iterator[None]:
        """Locks exist only for stored games: an unknown game ID raises instead of adding one."""
        with self._changed:
            game_lock = self._game_locks.get(game_id)
        if game_lock is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        with game_lock:
            yield

    def version(self, game_id: str) -> int | None:
        with self._changed:
            record = self._games.get(game_id)
            return record.version if record else None

    def wait_for_change(self, game_id: str, since_version: int, timeout: float) -> int | None:
        """
        Long polling: block until the game got written after `since_version`.

        Returns the current version, or None if the game does not exist (anymore).
        """
        with self._changed:
            self._changed.wait_for(
                lambda: self._version_unlocked(game_id) != since_version,
                timeout=timeout,
            )
            return self._version_unlocked(game_id)

    def clear(self) -> None:
        """Remove every game (useful in between tests)"""
        with self._changed:
            self._games.clear()
            self._game_locks.clear()
            self._changed.notify_all()

    def _version_unlocked(self, game_id: str) -> int | None:
        record = self._games.get(game_id)
        return record.version if record else None
