"""
Attack detection
----

"Is square S attacked by color C?" is answered by the movement rules themselves:
generate the pseudo-legal destinations of every piece of color C and look for S among them.
"""

from typing import Optional

from src.chess.board import Board
from src.chess.moves import EnPassantWindow, candidate_destinations
from src.chess.pieces import Piece
from src.chess.square import Square
from src.core.shared_types import Color, PieceType


def is_square_attacked(
    board: Board,
    square: Square,
    by_color: Color,
    en_passant: Optional[EnPassantWindow] = None,
) -> bool:
    for attacker_square in board.locate_color(by_color):
        if square in candidate_destinations(board, attacker_square, en_passant):
            return True
    return False


def is_any_square_attacked(
    board: Board,
    squares: list[Square],
    by_color: Color,
    en_passant: Optional[EnPassantWindow] = None,
) -> bool:
    return any(is_square_attacked(board, square, by_color, en_passant) for square in squares)


def find_king(board: Board, color: Color) -> Optional[Square]:
    return board.find_piece(Piece(color, PieceType.KING))


def is_in_check(
    board: Board, color: Color, en_passant: Optional[EnPassantWindow] = None
) -> bool:
    """
    Is the king of the given color attacked by the opponent?

    NOTE: A board without that king is a corrupted state. It is reported as 'not in check' rather than raising.
    """
    king_square = find_king(board, color)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, color.opponent, en_passant)
