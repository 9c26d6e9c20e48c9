"""
Checks for ending the game
----

Only checkmate and stalemate end a game. Other draws (threefold repetition, 50-move rule,
insufficient material) are not implemented.

Nothing is cached: callers ask again after every committed move.
"""

from typing import Iterator, Optional

from src.chess.attacks import is_in_check
from src.chess.board import Board
from src.chess.castling import CastlingRights
from src.chess.game import castle, castling_rejection_for
from src.chess.game_state import GameState
from src.chess.moves import (
    PROMOTION_RANK,
    CastleMove,
    EnPassantWindow,
    Move,
    PieceMove,
    candidate_destinations,
    is_en_passant_capture,
)
from src.chess.pieces import PROMOTION_OPTIONS
from src.core.shared_types import CastlingSide, Color, PieceType


def candidate_boards(
    board: Board,
    color: Color,
    en_passant: Optional[EnPassantWindow],
    rights: CastlingRights,
) -> Iterator[tuple[Move, Board]]:
    """
    Every pseudo-legal move of the color, paired with the scratch board it produces.
    ----

    * piece moves, including the removal of a pawn taken en passant
    * castling moves, but only when castling is currently allowed

    NOTE: the piece a pawn promotes into cannot get your own king out of check,
    so scratch boards are built with the pawn left unpromoted.
    """
    for from_square in board.locate_color(color):
        piece_type = board.piece(from_square).type
        for to_square in candidate_destinations(board, from_square, en_passant):
            scratch = board.copy()
            scratch.move_piece(from_square, to_square)
            if is_en_passant_capture(piece_type, to_square, en_passant):
                scratch.remove_piece(en_passant.captured_pawn_square)
            yield PieceMove(from_square, to_square), scratch

    for side in CastlingSide:
        if castling_rejection_for(board, color, side, rights, en_passant) is None:
            scratch = board.copy()
            castle(scratch, color, side)
            yield CastleMove(side), scratch


def every_move_leads_to_check(
    board: Board,
    color: Color,
    en_passant: Optional[EnPassantWindow],
    rights: CastlingRights,
) -> bool:
    """True if no candidate move leaves the own king safe. Stops at the first escape found."""
    for _, scratch in candidate_boards(board, color, en_passant, rights):
        # whether this move opens a new en passant window does not matter: it cannot attack a king
        if not is_in_check(scratch, color):
            return False
    return True


def is_check(state: GameState, color: Color) -> bool:
    return is_in_check(state.board, color, state.en_passant_window)


def _has_no_escape(state: GameState, color: Color) -> bool:
    return every_move_leads_to_check(
        state.board, color, state.en_passant_window, state.castling_rights
    )


def is_checkmate(state: GameState, color: Color) -> bool:
    return is_check(state, color) and _has_no_escape(state, color)


def is_stalemate(state: GameState, color: Color) -> bool:
    return not is_check(state, color) and _has_no_escape(state, color)


def is_game_over(state: GameState) -> bool:
    return (
        is_checkmate(state, Color.WHITE)
        or is_checkmate(state, Color.BLACK)
        or is_stalemate(state, state.turn_color)
    )


def get_winner(state: GameState) -> Optional[Color]:
    """
    The color that delivered checkmate, None for a draw.

    NOTE: requires is_game_over() to be True. Otherwise the answer is meaningless (None).
    """
    for color in (Color.WHITE, Color.BLACK):
        if is_checkmate(state, color):
            return color.opponent
    return None


def legal_moves(state: GameState, color: Optional[Color] = None) -> list[Move]:
    """
    List of legal moves for the player with the 'color' pieces (default: the color to move)
    ----

    Pawn pushes to the promotion rank are expanded into one move for every piece type to promote into.
    """
    color = color or state.turn_color
    moves: list[Move] = []
    for move, scratch in candidate_boards(
        state.board, color, state.en_passant_window, state.castling_rights
    ):
        if is_in_check(scratch, color):
            continue
        if isinstance(move, PieceMove) and _is_promotion(state.board, move, color):
            moves.extend(
                PieceMove(move.from_square, move.to_square, piece_type)
                for piece_type in PROMOTION_OPTIONS
            )
        else:
            moves.append(move)
    return moves


def _is_promotion(board: Board, move: PieceMove, color: Color) -> bool:
    piece = board.piece(move.from_square)
    return (
        piece is not None
        and piece.type == PieceType.PAWN
        and move.to_square.rank == PROMOTION_RANK[color]
    )
