"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8: (number of ranks, number of files)
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    """
    Grid coordinates, both zero-based.
    ----

    Rank 0 is the top row of the grid: black's home rank (the 8th rank in algebraic notation).
    Rank 7 is white's home rank (the 1st rank). File 0 is the a-file.

    NOTE: Squares off the board can be created on purpose. Movement rules step off the edge
    and then ask `is_within_bounds()`.
    """

    rank: int
    file: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' gets converted to (0, 0) and 'h1' to (7, 7)"""
        file = ord(sq[0]) - ord("a")
        rank = BOARD_DIMENSIONS[0] - int(sq[1])
        return cls(rank, file)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{BOARD_DIMENSIONS[0] - self.rank}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.rank < BOARD_DIMENSIONS[0]) and (
            0 <= self.file < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_rank: int, d_file: int) -> Square:
        return Square(self.rank + d_rank, self.file + d_file)
