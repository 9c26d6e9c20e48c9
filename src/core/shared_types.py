"""
Type definitions used across layers

The values are the wire encoding the clients rely on:
a board square is encoded as <color letter><piece letter>, e.g. "WK" for the white king.
"""

from enum import StrEnum


class Color(StrEnum):
    WHITE = "W"
    BLACK = "B"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class PieceType(StrEnum):
    PAWN = "P"
    KNIGHT = "N"
    BISHOP = "B"
    ROOK = "R"
    QUEEN = "Q"
    KING = "K"


class CastlingSide(StrEnum):
    """A castling move is requested by naming the side, using the letter of the piece on that wing."""

    KING_SIDE = "K"
    QUEEN_SIDE = "Q"


# Two characters, so every square of the wire grid has the same width.
EMPTY_SQUARE_CODE = "  "
