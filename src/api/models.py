"""Requests and Response models"""

from typing import Optional, Self

from pydantic import BaseModel, Field, model_validator

from src.chess.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidRequestError
from src.core.models import MoveResult, SeatResult, ViewerSnapshot
from src.core.shared_types import CastlingSide, Color, PieceType

PlayerId = str


class SquarePosition(BaseModel):
    """Grid coordinates as the client sends them: rank 0 is black's home rank."""

    rank: int = Field(ge=0, lt=BOARD_DIMENSIONS[0])
    file: int = Field(ge=0, lt=BOARD_DIMENSIONS[1])


class MoveData(BaseModel):
    """
    Either a castling move (only `castling` set)
    or a piece move (`from_square` + `to_square`, and `promote_to` when a pawn reaches the last rank).
    """

    castling: Optional[CastlingSide] = None
    from_square: Optional[SquarePosition] = None
    to_square: Optional[SquarePosition] = None
    promote_to: Optional[PieceType] = None

    @model_validator(mode="after")
    def validate_move_shape(self) -> Self:
        has_squares = self.from_square is not None and self.to_square is not None
        has_any_square = self.from_square is not None or self.to_square is not None
        if self.castling is not None and has_any_square:
            raise InvalidRequestError(
                "A castling move cannot also name from_square/to_square."
            )
        if self.castling is None and not has_squares:
            raise InvalidRequestError(
                "A move needs either a castling side or both from_square and to_square."
            )
        return self


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """The creator may take a seat right away, by giving both the player ID and the color."""

    player_id: Optional[PlayerId] = None
    color: Optional[Color] = None

    @model_validator(mode="after")
    def validate_seat(self) -> Self:
        if (self.player_id is None) != (self.color is None):
            raise InvalidRequestError(
                "To take a seat when creating a game, give both player_id and color."
            )
        return self


class JoinGameRequest(BaseModel):
    game_id: str
    player_id: PlayerId
    color: Color


class GetGameRequest(BaseModel):
    game_id: str
    player_id: Optional[PlayerId] = None


class MoveRequest(BaseModel):
    game_id: str
    player_id: PlayerId
    move: MoveData


class LegalMovesRequest(BaseModel):
    game_id: str
    player_id: PlayerId


class WaitForUpdateRequest(BaseModel):
    """Long polling: wait until the game changed after the version the client last saw."""

    game_id: str
    since_version: int = Field(ge=0)
    player_id: Optional[PlayerId] = None
    timeout: Optional[float] = Field(default=None, gt=0)


class DeleteGameRequest(BaseModel):
    game_id: str


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    version: int
    game_status: ViewerSnapshot


class JoinGameResponse(GameResponse):
    seat_result: SeatResult


class MoveResponse(GameResponse):
    move_result: MoveResult


class UpdateResponse(GameResponse):
    changed: bool


class LegalMovesResponse(BaseModel):
    game_id: str
    player_id: PlayerId
    color: Color
    legal_moves: list[MoveData]
