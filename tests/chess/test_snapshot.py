"""Unit tests for /src/chess/snapshot.py"""

from dataclasses import replace

from src.chess import game as rules
from src.chess.castling import CastlingRights, SideRights
from src.chess.game_state import GameState
from src.chess.moves import PieceMove
from src.chess.snapshot import to_viewer_snapshot
from src.chess.square import Square
from src.core.models import EnPassantModel, SideRightsModel, SquareModel
from src.core.shared_types import EMPTY_SQUARE_CODE, Color

from tests.conftest import BLACK_PLAYER, WHITE_PLAYER


def test_starting_position_snapshot(started_game: GameState) -> None:
    snapshot = to_viewer_snapshot(started_game)
    assert snapshot.game_id == "test-game"
    assert snapshot.ready_to_start
    assert not snapshot.game_over
    assert snapshot.winner is None
    assert snapshot.turn_color == Color.WHITE
    assert snapshot.en_passant_window is None
    assert snapshot.open_seats == []
    assert snapshot.my_color is None

    assert snapshot.board[0] == ["BR", "BN", "BB", "BQ", "BK", "BB", "BN", "BR"]
    assert snapshot.board[1] == ["BP"] * 8
    assert snapshot.board[4] == [EMPTY_SQUARE_CODE] * 8
    assert snapshot.board[7] == ["WR", "WN", "WB", "WQ", "WK", "WB", "WN", "WR"]


def test_my_color_only_for_seated_viewers(started_game: GameState) -> None:
    assert to_viewer_snapshot(started_game, WHITE_PLAYER).my_color == Color.WHITE
    assert to_viewer_snapshot(started_game, BLACK_PLAYER).my_color == Color.BLACK
    assert to_viewer_snapshot(started_game, "spectator").my_color is None


def test_open_seats_before_anyone_joined() -> None:
    snapshot = to_viewer_snapshot(rules.create("new-game"))
    assert not snapshot.ready_to_start
    assert snapshot.open_seats == [Color.WHITE, Color.BLACK]


def test_snapshot_is_stable(started_game: GameState) -> None:
    """Taking a snapshot reads the state only: taking it twice gives the same record"""
    first = to_viewer_snapshot(started_game, WHITE_PLAYER)
    second = to_viewer_snapshot(started_game, WHITE_PLAYER)
    assert first == second


def test_snapshot_after_double_step(started_game: GameState) -> None:
    move = PieceMove(Square.from_algebraic("e2"), Square.from_algebraic("e4"))
    result, state = rules.execute_move(started_game, WHITE_PLAYER, move)
    assert result.success

    snapshot = to_viewer_snapshot(state, BLACK_PLAYER)
    assert snapshot.turn_color == Color.BLACK
    assert snapshot.board[6][4] == EMPTY_SQUARE_CODE
    assert snapshot.board[4][4] == "WP"
    assert snapshot.en_passant_window == EnPassantModel(
        capture_square=SquareModel(rank=5, file=4),
        captured_pawn_square=SquareModel(rank=4, file=4),
    )


def test_castling_rights_in_snapshot(started_game: GameState) -> None:
    state = replace(
        started_game,
        castling_rights=CastlingRights(white=SideRights(False, True), black=SideRights(False, False)),
    )
    rights = to_viewer_snapshot(state).castling_rights
    assert rights[Color.WHITE] == SideRightsModel(king_side=False, queen_side=True)
    assert rights[Color.BLACK] == SideRightsModel(king_side=False, queen_side=False)


def test_winner_after_checkmate(make_state) -> None:
    state = make_state("R5k1/5ppp/8/8/8/8/8/6K1", turn_color=Color.BLACK)
    snapshot = to_viewer_snapshot(state)
    assert snapshot.game_over
    assert snapshot.winner == Color.WHITE


def test_no_winner_after_stalemate(make_state) -> None:
    state = make_state("7k/8/6Q1/8/8/8/8/K7", turn_color=Color.BLACK)
    snapshot = to_viewer_snapshot(state)
    assert snapshot.game_over
    assert snapshot.winner is None


def test_snapshot_serializes_to_json(started_game: GameState) -> None:
    data = to_viewer_snapshot(started_game, WHITE_PLAYER).model_dump(mode="json")
    assert data["turn_color"] == "W"
    assert data["my_color"] == "W"
    assert data["castling_rights"]["B"] == {"king_side": True, "queen_side": True}
