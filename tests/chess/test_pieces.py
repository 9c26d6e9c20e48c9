"""Unit tests for src/chess/pieces.py"""

import pytest

from src.chess.pieces import PROMOTION_OPTIONS, Piece
from src.core.shared_types import Color, PieceType


@pytest.mark.parametrize(
    "code, color, piece_type",
    [
        ("WK", Color.WHITE, PieceType.KING),
        ("WQ", Color.WHITE, PieceType.QUEEN),
        ("BR", Color.BLACK, PieceType.ROOK),
        ("BB", Color.BLACK, PieceType.BISHOP),
        ("WN", Color.WHITE, PieceType.KNIGHT),
        ("BP", Color.BLACK, PieceType.PAWN),
    ],
)
def test_wire_code(code: str, color: Color, piece_type: PieceType) -> None:
    """Color letter followed by piece letter"""
    piece = Piece(color, piece_type)
    assert piece.to_code() == code


@pytest.mark.parametrize("character", list("pnbrqkPNBRQK"))
def test_fen_character(character: str) -> None:
    """lower case: black pieces, upper case: white pieces"""
    piece = Piece.from_fen(character)
    expected_color = Color.WHITE if character.isupper() else Color.BLACK
    assert piece.color == expected_color
    assert piece.to_fen() == character


def test_promotion_keeps_color() -> None:
    pawn = Piece(Color.BLACK, PieceType.PAWN)
    queen = pawn.promote_to(PieceType.QUEEN)
    assert queen == Piece(Color.BLACK, PieceType.QUEEN)
    # the original piece did not change
    assert pawn.type == PieceType.PAWN


def test_promotion_options() -> None:
    """A pawn can not stay a pawn, nor become a king"""
    assert set(PROMOTION_OPTIONS) == {
        PieceType.ROOK,
        PieceType.KNIGHT,
        PieceType.BISHOP,
        PieceType.QUEEN,
    }


def test_unicode_symbols() -> None:
    assert Piece(Color.WHITE, PieceType.KING).to_unicode() == "♔"
    assert Piece(Color.BLACK, PieceType.PAWN).to_unicode() == "♟"
