"""The Board holds the configuration of pieces on the 8x8 grid and answers occupancy questions about it."""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.pieces import FEN_TO_PIECE, Piece
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import InvalidBoardError
from src.core.shared_types import EMPTY_SQUARE_CODE, Color, PieceType

Grid = list[list[Optional[Piece]]]

HOME_RANK_ORDER: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


@dataclass
class Board:
    """
    Fixed-size grid of squares, indexed as grid[rank][file].

    NOTE: Boards that belong to a committed GameState are never mutated.
    The rules engine takes a `copy()` as scratch board and only mutates the copy.
    """

    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        num_ranks, num_files = BOARD_DIMENSIONS
        return cls([[None] * num_files for _ in range(num_ranks)])

    @classmethod
    def starting_position(cls) -> Self:
        """Standard initial setup: black on ranks 0 and 1, white on ranks 6 and 7"""
        board = cls.empty()
        for file, piece_type in enumerate(HOME_RANK_ORDER):
            board.place_piece(Piece(Color.BLACK, piece_type), Square(0, file))
            board.place_piece(Piece(Color.BLACK, PieceType.PAWN), Square(1, file))
            board.place_piece(Piece(Color.WHITE, PieceType.PAWN), Square(6, file))
            board.place_piece(Piece(Color.WHITE, piece_type), Square(7, file))
        return board

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (rank 0 of the grid), starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces (rank 7 of the grid).

        NOTE: FEN lists the ranks top to bottom, which is exactly the order of the grid rows.
        """
        num_ranks, num_files = BOARD_DIMENSIONS
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != num_ranks:
            raise InvalidBoardError(
                f"FEN placement must describe {num_ranks} ranks: {fen_str!r}"
            )

        board = cls.empty()
        for rank, fen_one_rank in enumerate(fen_by_ranks):
            file = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                elif character.lower() in FEN_TO_PIECE and file < num_files:
                    board.place_piece(Piece.from_fen(character), Square(rank, file))
                    file += 1
                else:
                    raise InvalidBoardError(
                        f"Unexpected character {character!r} on rank {rank} of FEN placement: {fen_str!r}"
                    )
            if file != num_files:
                raise InvalidBoardError(
                    f"Rank {rank} of FEN placement does not cover {num_files} files: {fen_str!r}"
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in self.grid)

    def _rank_to_fen(self, row: list[Optional[Piece]]) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def to_codes(self) -> list[list[str]]:
        """Wire encoding of the board: 'WK', 'BP', ... or two spaces for an empty square."""
        return [
            [EMPTY_SQUARE_CODE if piece is None else piece.to_code() for piece in row]
            for row in self.grid
        ]

    def to_pretty_string(self) -> str:
        """Console rendering with unicode pieces. Ranks and files are labelled by grid index."""
        header = "  " + " ".join(str(file) for file in range(BOARD_DIMENSIONS[1]))
        lines = [header]
        for rank, row in enumerate(self.grid):
            symbols = " ".join("." if piece is None else piece.to_unicode() for piece in row)
            lines.append(f"{rank} {symbols}")
        return "\n".join(lines)

    # --- OCCUPANCY QUERIES ---
    def piece(self, square: Square) -> Optional[Piece]:
        """The piece on the square, None if empty or off the board."""
        if not square.is_within_bounds():
            return None
        return self.grid[square.rank][square.file]

    def is_empty(self, square: Square) -> bool:
        """Off-board squares are neither empty nor occupied."""
        return square.is_within_bounds() and self.grid[square.rank][square.file] is None

    def is_color(self, square: Square, color: Color) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.color == color

    def locate_color(self, color: Color) -> list[Square]:
        return [
            Square(rank, file)
            for rank, row in enumerate(self.grid)
            for file, piece in enumerate(row)
            if piece is not None and piece.color == color
        ]

    def find_piece(self, piece: Piece) -> Optional[Square]:
        """First square (in grid order) holding the given piece."""
        for rank, row in enumerate(self.grid):
            for file, found in enumerate(row):
                if found == piece:
                    return Square(rank, file)
        return None

    # --- SCRATCH BOARD UPDATES ---
    def copy(self) -> "Board":
        """Pieces are immutable, so copying the rows is enough."""
        return Board([list(row) for row in self.grid])

    def place_piece(self, piece: Optional[Piece], square: Square) -> None:
        self.grid[square.rank][square.file] = piece

    def remove_piece(self, square: Square) -> None:
        self.grid[square.rank][square.file] = None

    def move_piece(self, from_square: Square, to_square: Square) -> None:
        """Relocate whatever stands on from_square, capturing whatever stood on to_square."""
        self.grid[to_square.rank][to_square.file] = self.grid[from_square.rank][from_square.file]
        self.grid[from_square.rank][from_square.file] = None
