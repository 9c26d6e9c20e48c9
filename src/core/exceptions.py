"""
Exceptions raised outside of the rules of chess.

NOTE: A move that breaks a rule is NOT an exception. The rules engine answers with a MoveResult instead,
so these are reserved for faults of the hosting layer (unknown game, malformed request, corrupt fixture).
"""


class GameError(Exception):
    """Base class for all errors raised by this application."""


class GameNotFoundError(GameError):
    """No game is stored under the requested game ID."""


class InvalidRequestError(GameError, ValueError):
    """Request data cannot be interpreted.

    NOTE: also a ValueError, so pydantic validators raising it produce a regular ValidationError.
    """


class InvalidBoardError(GameError, ValueError):
    """A board description (wire grid or FEN placement) is malformed."""
