"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the pseudo-legal destinations for each piece type.

The generator only looks at the color of the piece that moves, never at whose turn it is.
Whether the move leaves your own king in check is decided later by the rules in game.py
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from src.chess.board import Board
from src.chess.square import Square
from src.core.shared_types import CastlingSide, Color, PieceType

Vector = tuple[int, int]


# --- MOVES (INPUT) ---
@dataclass(frozen=True)
class CastleMove:
    """Castling is requested by naming the side. The king and rook squares follow from the rules."""

    side: CastlingSide


@dataclass(frozen=True)
class PieceMove:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square
    promote_to: Optional[PieceType] = None


Move = Union[CastleMove, PieceMove]


@dataclass(frozen=True)
class EnPassantWindow:
    """
    Open for exactly one move after a pawn advanced two squares.

    * capture_square: where an attacking pawn lands (the square the double-stepping pawn passed over)
    * captured_pawn_square: where the double-stepping pawn stands, and gets removed from.
    """

    capture_square: Square
    captured_pawn_square: Square


# --- PAWN GEOMETRY ---
# white moves UP the board (towards rank 0), black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}


def is_double_step(piece_type: PieceType, color: Color, from_square: Square, to_square: Square) -> bool:
    return (
        piece_type == PieceType.PAWN
        and from_square.rank == PAWN_START_RANK[color]
        and to_square.rank - from_square.rank == 2 * PAWN_DIRECTION[color]
    )


def is_en_passant_capture(
    piece_type: PieceType, to_square: Square, en_passant: Optional[EnPassantWindow]
) -> bool:
    return (
        piece_type == PieceType.PAWN
        and en_passant is not None
        and to_square == en_passant.capture_square
    )


# --- MOVEMENT RULES ---
def raycasting_move(square: Square, board: Board, directions: list[Vector]) -> list[Square]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board.
    An opponent's piece ends the ray but can be captured, your own piece ends the ray before it.
    """
    player_color = board.piece(square).color
    opponent_color = player_color.opponent

    destinations: list[Square] = []
    for d_rank, d_file in directions:
        target_square = square.offset(d_rank, d_file)
        while board.is_empty(target_square):
            destinations.append(target_square)
            target_square = target_square.offset(d_rank, d_file)

        # only need to add the first occupied square found if it is the opponent's: then it can be captured.
        if board.is_color(target_square, opponent_color):
            destinations.append(target_square)
    return destinations


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    opponent_color = board.piece(square).color.opponent
    destinations: list[Square] = []
    for d_rank, d_file in deltas:
        target_square = square.offset(d_rank, d_file)
        if board.is_empty(target_square) or board.is_color(target_square, opponent_color):
            destinations.append(target_square)
    return destinations


def candidate_pawn_moves(
    square: Square, board: Board, en_passant: Optional[EnPassantWindow] = None
) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move (so when on their starting rank), as long as both squares are empty
    - takes diagonally
    - takes en passant on the capture square of an open window
    """
    color = board.piece(square).color
    direction = PAWN_DIRECTION[color]
    destinations: list[Square] = []

    one_step = square.offset(direction, 0)
    if board.is_empty(one_step):
        destinations.append(one_step)
        two_steps = square.offset(2 * direction, 0)
        if square.rank == PAWN_START_RANK[color] and board.is_empty(two_steps):
            destinations.append(two_steps)

    for d_file in (-1, 1):
        diagonal = square.offset(direction, d_file)
        if board.is_color(diagonal, color.opponent):
            destinations.append(diagonal)
        elif en_passant is not None and diagonal == en_passant.capture_square:
            destinations.append(diagonal)
    return destinations


KNIGHT_DELTAS: list[Vector] = [
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
]

KING_DELTAS: list[Vector] = [
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
]

DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]


def candidate_knight_moves(
    square: Square, board: Board, en_passant: Optional[EnPassantWindow] = None
) -> list[Square]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(
    square: Square, board: Board, en_passant: Optional[EnPassantWindow] = None
) -> list[Square]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(
    square: Square, board: Board, en_passant: Optional[EnPassantWindow] = None
) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(
    square: Square, board: Board, en_passant: Optional[EnPassantWindow] = None
) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, board, DIAGONALS + STRAIGHTS)


def candidate_king_moves(
    square: Square, board: Board, en_passant: Optional[EnPassantWindow] = None
) -> list[Square]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a separate move (CastleMove) and check-safety is not considered here.
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board, Optional[EnPassantWindow]], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def candidate_destinations(
    board: Board, square: Square, en_passant: Optional[EnPassantWindow] = None
) -> list[Square]:
    """Pseudo-legal destinations of the piece on the square. An empty (or off-board) square has none."""
    piece = board.piece(square)
    if piece is None:
        return []
    movement_rule = MOVEMENT_RULES[piece.type]
    return movement_rule(square, board, en_passant)
