"""Protocol repository (the store of games, keyed by game ID. Injected into the Service.)"""

from contextlib import AbstractContextManager
from typing import Protocol

from src.chess.game_state import GameState


class GameRepository(Protocol):
    """Storage layer orchestration"""

    def get_game(self, game_id: str) -> GameState | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameState) -> tuple[GameState, str]:
        """Store new game under a newly created game ID and return the stored game + that ID."""
        ...

    def update_game(self, game_id: str, game: GameState) -> GameState | None:
        """Replace the state of an existing record."""
        ...

    def delete_game(self, game_id: str) -> GameState | None:
        """Remove a game's record."""
        ...

    def lock(self, game_id: str) -> AbstractContextManager[None]:
        """Exclusive access to one game: hold it for the whole read -> change -> write sequence. Raises GameNotFoundError for an unknown game."""
        ...

    def version(self, game_id: str) -> int | None:
        """Number of writes to the record so far."""
        ...

    def wait_for_change(self, game_id: str, since_version: int, timeout: float) -> int | None:
        """Block until the record's version exceeds since_version (or the timeout passes). Returns the current version."""
        ...
