"""
The rules of a single move.
----

`execute_move()` is the entrypoint into the domain layer for the service layer.
It validates a move attempt against every rule and, if it passes, hands back a completely new GameState.

It is a state transition: (GameState, player, Move) -> (MoveResult, GameState).
On a rejected move the very same GameState object is returned, so nothing observable ever changes on failure.
"""

from dataclasses import replace
from typing import Optional

from src.chess.attacks import is_any_square_attacked, is_in_check
from src.chess.board import Board
from src.chess.castling import CASTLING_RULES, CastlingRights, revoke_rights_for_squares
from src.chess.game_state import GameState
from src.chess.moves import (
    PROMOTION_RANK,
    CastleMove,
    EnPassantWindow,
    Move,
    PieceMove,
    candidate_destinations,
    is_double_step,
    is_en_passant_capture,
)
from src.chess.pieces import PROMOTION_OPTIONS
from src.core.models import MoveResult, SeatResult
from src.core.shared_types import CastlingSide, Color, PieceType

# Messages are shown verbatim to the player
NOT_A_PARTICIPANT = "Player is not a participant."
NOT_YOUR_TURN = "It is not your turn."
CASTLING_RIGHTS_LOST = "Rook or king has moved, cannot castle."
CASTLING_BLOCKED = "Pieces in the way, cannot castle."
CASTLING_THROUGH_CHECK = "Cannot castle from, through, or into check."
NOT_YOUR_PIECE = "You do not own a piece at this position."
ILLEGAL_DESTINATION = "Cannot move to this position."
INVALID_PROMOTION = "Invalid pawn promotion."
ALREADY_IN_CHECK = "You are in check."
MOVING_INTO_CHECK = "You cannot move into check."

SEAT_NAMES: dict[Color, str] = {Color.WHITE: "White", Color.BLACK: "Black"}


# --- DOMAIN LAYER API CALLED BY SERVICE ---
def create(game_id: str) -> GameState:
    """Standard starting position, no players yet, all castling rights, no en passant window."""
    return GameState(game_id=game_id)


def add_player(state: GameState, player_id: str, color: Color) -> tuple[SeatResult, GameState]:
    """Seat a player. Every color has exactly one seat."""
    if state.player_id(color) is not None:
        return SeatResult.rejected(f"{SEAT_NAMES[color]} is already assigned."), state
    return SeatResult.ok(), state.with_player(color, player_id)


def execute_move(
    state: GameState, player_id: Optional[str], move: Move
) -> tuple[MoveResult, GameState]:
    """
    Attempt to make a move
    -----

    1. check the player holds a seat and it is their turn
    2. castling or a regular piece move? Validate and apply it on a scratch copy of the board
    3. a regular move may not leave your own king in check
    4. revoke castling rights touched by the move
    5. commit: new board, en passant window, castling rights and the other color to move
    """
    player_color = state.player_color(player_id)
    if player_color is None:
        return MoveResult.rejected(NOT_A_PARTICIPANT), state
    if player_color != state.turn_color:
        return MoveResult.rejected(NOT_YOUR_TURN), state

    match move:
        case CastleMove(side=side):
            rejection = castling_rejection(state, side)
            if rejection is not None:
                return MoveResult.rejected(rejection), state
            board = state.board.copy()
            castle(board, state.turn_color, side)
            rights = state.castling_rights.revoke(state.turn_color, side)
            squares = CASTLING_RULES[(state.turn_color, side)]
            from_square, to_square = squares.king_from, squares.king_to
            en_passant = None

        case PieceMove(from_square=from_square, to_square=to_square):
            rejection, board, en_passant = _apply_piece_move(state, move)
            if rejection is not None:
                return MoveResult.rejected(rejection), state

            if is_in_check(board, state.turn_color, en_passant):
                # Vary the message depending on if you were already in check, to make it clearer
                already_in_check = is_in_check(
                    state.board, state.turn_color, state.en_passant_window
                )
                message = ALREADY_IN_CHECK if already_in_check else MOVING_INTO_CHECK
                return MoveResult.rejected(message), state
            rights = state.castling_rights

        case _:
            raise TypeError(f"Unknown move: {move!r}")

    rights = revoke_rights_for_squares(rights, from_square, to_square)
    new_state = replace(
        state,
        board=board,
        en_passant_window=en_passant,
        castling_rights=rights,
        turn_color=state.turn_color.opponent,
    )
    return MoveResult.ok(), new_state


# --- CASTLING ---
def castling_rejection(state: GameState, side: CastlingSide) -> Optional[str]:
    """Why the color to move cannot castle to the given side, None if it can."""
    return castling_rejection_for(
        state.board, state.turn_color, side, state.castling_rights, state.en_passant_window
    )


def castling_rejection_for(
    board: Board,
    color: Color,
    side: CastlingSide,
    rights: CastlingRights,
    en_passant: Optional[EnPassantWindow],
) -> Optional[str]:
    """
    **you are allowed to castle if**

    * Castling rights for that side are not yet revoked.
    * Every square in between the king and the rook is empty.
    * The king does not start on, pass through or land on a square under attack.
    """
    if not rights.can_castle(color, side):
        return CASTLING_RIGHTS_LOST

    squares = CASTLING_RULES[(color, side)]
    if not all(board.is_empty(square) for square in squares.squares_between()):
        return CASTLING_BLOCKED

    if is_any_square_attacked(board, squares.king_path(), color.opponent, en_passant):
        return CASTLING_THROUGH_CHECK
    return None


def castle(board: Board, color: Color, side: CastlingSide) -> None:
    """Move both the King and the Rook (on a scratch board)"""
    squares = CASTLING_RULES[(color, side)]
    board.move_piece(squares.king_from, squares.king_to)
    board.move_piece(squares.rook_from, squares.rook_to)


# --- REGULAR MOVES ---
def _apply_piece_move(
    state: GameState, move: PieceMove
) -> tuple[Optional[str], Board, Optional[EnPassantWindow]]:
    """
    Validate the geometry of the move and play it on a scratch board.

    Returns (rejection message or None, scratch board, en passant window for the opponent's next move).
    """
    piece = state.board.piece(move.from_square)
    if piece is None or piece.color != state.turn_color:
        return NOT_YOUR_PIECE, state.board, state.en_passant_window

    destinations = candidate_destinations(state.board, move.from_square, state.en_passant_window)
    if move.to_square not in destinations:
        return ILLEGAL_DESTINATION, state.board, state.en_passant_window

    board = state.board.copy()
    board.move_piece(move.from_square, move.to_square)

    window = state.en_passant_window
    if is_en_passant_capture(piece.type, move.to_square, window):
        # for the type checker: is_en_passant_capture already made sure the window is open
        assert window is not None
        board.remove_piece(window.captured_pawn_square)

    en_passant = opened_en_passant_window(piece.type, piece.color, move)

    if piece.type == PieceType.PAWN and move.to_square.rank == PROMOTION_RANK[piece.color]:
        if move.promote_to not in PROMOTION_OPTIONS:
            return INVALID_PROMOTION, state.board, state.en_passant_window
        board.place_piece(piece.promote_to(move.promote_to), move.to_square)

    return None, board, en_passant


def opened_en_passant_window(
    piece_type: PieceType, color: Color, move: PieceMove
) -> Optional[EnPassantWindow]:
    """A pawn double-step opens the window for the opponent's next move. Any other move closes it."""
    if not is_double_step(piece_type, color, move.from_square, move.to_square):
        return None
    passed_square = move.from_square.offset((move.to_square.rank - move.from_square.rank) // 2, 0)
    return EnPassantWindow(capture_square=passed_square, captured_pawn_square=move.to_square)
