"""
Domain level data model of a single game.

A GameState is a value: the rules engine never changes one, it hands back a new one when a move gets committed.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Self

from src.chess.board import Board
from src.chess.castling import CastlingRights
from src.chess.moves import EnPassantWindow
from src.core.shared_types import Color


@dataclass(frozen=True)
class GameState:
    game_id: str
    board: Board = field(default_factory=Board.starting_position)
    turn_color: Color = Color.WHITE
    castling_rights: CastlingRights = CastlingRights()
    en_passant_window: Optional[EnPassantWindow] = None
    white_player_id: Optional[str] = None
    black_player_id: Optional[str] = None

    @classmethod
    def from_fen(
        cls,
        game_id: str,
        placement: str,
        turn_color: Color = Color.WHITE,
        castling_rights: Optional[CastlingRights] = None,
        en_passant_window: Optional[EnPassantWindow] = None,
    ) -> Self:
        """Start from an arbitrary position (handy for puzzles and test fixtures). Rights default to none."""
        return cls(
            game_id=game_id,
            board=Board.from_fen(placement),
            turn_color=turn_color,
            castling_rights=castling_rights if castling_rights is not None else CastlingRights.none(),
            en_passant_window=en_passant_window,
        )

    def player_id(self, color: Color) -> Optional[str]:
        return self.white_player_id if color == Color.WHITE else self.black_player_id

    def with_player(self, color: Color, player_id: str) -> "GameState":
        if color == Color.WHITE:
            return replace(self, white_player_id=player_id)
        return replace(self, black_player_id=player_id)

    def player_color(self, player_id: Optional[str]) -> Optional[Color]:
        """The seat held by the player. White is checked first."""
        if player_id is None:
            return None
        for color in (Color.WHITE, Color.BLACK):
            if self.player_id(color) == player_id:
                return color
        return None

    def open_seats(self) -> list[Color]:
        return [color for color in (Color.WHITE, Color.BLACK) if self.player_id(color) is None]

    def is_ready_to_start(self) -> bool:
        return not self.open_seats()
