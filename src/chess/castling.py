"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from dataclasses import dataclass, replace
from typing import Self

from src.chess.square import Square
from src.core.shared_types import CastlingSide, Color

HOME_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}
KING_HOME_FILE = 4


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, we already know the king / rook are still at their starting squares.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    def squares_between(self) -> list[Square]:
        """Squares strictly between king and rook: these must all be empty."""
        return squares_between_on_rank(self.king_from, self.rook_from)

    def king_path(self) -> list[Square]:
        """Start, transit and destination square of the king: none of these may be attacked."""
        return [self.king_from, *squares_between_on_rank(self.king_from, self.king_to), self.king_to]


def squares_between_on_rank(from_square: Square, to_square: Square) -> list[Square]:
    """Find the squares in between the two squares specified that are on the same rank"""
    if from_square.rank != to_square.rank:
        raise ValueError(
            f"squares_between_on_rank requires both squares to lie on the same rank. \n from: {from_square}\n to:{to_square}"
        )
    step = 1 if to_square.file > from_square.file else -1
    return [
        Square(from_square.rank, file)
        for file in range(from_square.file + step, to_square.file, step)
    ]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (Color.WHITE, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    (Color.WHITE, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    (Color.BLACK, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    (Color.BLACK, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}


@dataclass(frozen=True)
class SideRights:
    king_side: bool = True
    queen_side: bool = True

    def has(self, side: CastlingSide) -> bool:
        return self.king_side if side == CastlingSide.KING_SIDE else self.queen_side


@dataclass(frozen=True)
class CastlingRights:
    """
    Per color, two independent flags.
    ---

    Rights only ever get revoked. Revoking returns a new value, so a committed GameState never changes underneath a caller.
    """

    white: SideRights = SideRights()
    black: SideRights = SideRights()

    def of(self, color: Color) -> SideRights:
        return self.white if color == Color.WHITE else self.black

    def can_castle(self, color: Color, side: CastlingSide) -> bool:
        return self.of(color).has(side)

    def revoke(self, color: Color, side: CastlingSide) -> "CastlingRights":
        field_name = "king_side" if side == CastlingSide.KING_SIDE else "queen_side"
        side_rights = replace(self.of(color), **{field_name: False})
        if color == Color.WHITE:
            return replace(self, white=side_rights)
        return replace(self, black=side_rights)

    def revoke_all(self, color: Color) -> "CastlingRights":
        return self.revoke(color, CastlingSide.KING_SIDE).revoke(color, CastlingSide.QUEEN_SIDE)

    @classmethod
    def none(cls) -> Self:
        return cls(SideRights(False, False), SideRights(False, False))


def revoke_rights_for_squares(
    rights: CastlingRights, from_square: Square, to_square: Square
) -> CastlingRights:
    """
    Castling-rights bookkeeping after a move
    ----

    1. A move leaving a king's home square revokes both rights of that color.
    2. A move leaving a corner (rook home square) revokes the right of that side.
    3. A move landing on a corner revokes the right of that side: the rook standing there got captured
       (or had already left).

    NOTE: Checked by square only, not by piece. Revoking a right that is already gone changes nothing.
    """
    for color, rank in HOME_RANK.items():
        if from_square == Square(rank, KING_HOME_FILE):
            rights = rights.revoke_all(color)

    for (color, side), squares in CASTLING_RULES.items():
        if squares.rook_from in (from_square, to_square):
            rights = rights.revoke(color, side)
    return rights
