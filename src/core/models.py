"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the domain layer from the information sent across boundaries)
"""

from typing import Optional, Self

from pydantic import BaseModel, ConfigDict

from src.core.shared_types import Color


class MoveResult(BaseModel):
    """Outcome of a move attempt. A rejected move carries a message meant for the player."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls) -> Self:
        return cls(success=True)

    @classmethod
    def rejected(cls, message: str) -> Self:
        return cls(success=False, message=message)


class SeatResult(MoveResult):
    """Outcome of taking a seat (white or black) in a game."""


class SquareModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: int
    file: int


class EnPassantModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    capture_square: SquareModel
    captured_pawn_square: SquareModel


class SideRightsModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    king_side: bool
    queen_side: bool


class ViewerSnapshot(BaseModel):
    """Everything a client needs to draw the game, as seen by one viewer."""

    model_config = ConfigDict(frozen=True)

    game_id: str
    ready_to_start: bool
    game_over: bool
    winner: Optional[Color]
    turn_color: Color
    board: list[list[str]]
    en_passant_window: Optional[EnPassantModel]
    castling_rights: dict[Color, SideRightsModel]
    open_seats: list[Color]
    my_color: Optional[Color] = None
