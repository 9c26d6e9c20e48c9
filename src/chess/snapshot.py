"""Convert a GameState into the record a client uses to show the game."""

from typing import Optional

from src.chess.game_state import GameState
from src.chess.square import Square
from src.chess.terminal import get_winner, is_game_over
from src.core.models import EnPassantModel, SideRightsModel, SquareModel, ViewerSnapshot
from src.core.shared_types import Color


def _square_model(square: Square) -> SquareModel:
    return SquareModel(rank=square.rank, file=square.file)


def to_viewer_snapshot(state: GameState, viewer_player_id: Optional[str] = None) -> ViewerSnapshot:
    """
    Info that the client needs to show the UI.

    `my_color` is only filled in when the viewer holds a seat in this game.
    """
    game_over = is_game_over(state)
    window = state.en_passant_window
    return ViewerSnapshot(
        game_id=state.game_id,
        ready_to_start=state.is_ready_to_start(),
        game_over=game_over,
        winner=get_winner(state) if game_over else None,
        turn_color=state.turn_color,
        board=state.board.to_codes(),
        en_passant_window=(
            EnPassantModel(
                capture_square=_square_model(window.capture_square),
                captured_pawn_square=_square_model(window.captured_pawn_square),
            )
            if window is not None
            else None
        ),
        castling_rights={
            color: SideRightsModel(
                king_side=state.castling_rights.of(color).king_side,
                queen_side=state.castling_rights.of(color).queen_side,
            )
            for color in (Color.WHITE, Color.BLACK)
        },
        open_seats=state.open_seats(),
        my_color=state.player_color(viewer_player_id),
    )
