"""Orchestration of communication from API layer to rules engine and game store (and the reverse direction)."""

import logging
import secrets
from typing import Optional

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    JoinGameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveData,
    MoveRequest,
    MoveResponse,
    SquarePosition,
    UpdateResponse,
    WaitForUpdateRequest,
)
from src.chess import game as rules
from src.chess.game_state import GameState
from src.chess.moves import CastleMove, Move, PieceMove
from src.chess.snapshot import to_viewer_snapshot
from src.chess.square import Square
from src.chess.terminal import legal_moves
from src.core.config import Settings
from src.core.exceptions import GameNotFoundError, InvalidRequestError
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(self, repository: GameRepository, settings: Optional[Settings] = None) -> None:
        self.repo = repository
        self.settings = settings or Settings()
        self._player_ids: set[str] = set()

    # -- API routes logic ---
    def create_player_id(self) -> str:
        """
        Hand out a random player ID that has not been handed out before.

        NOTE: the issued IDs are only remembered to keep them unique. Seats are not checked against them:
        a player ID is whatever identity the transport layer vouches for (ex. a cookie).
        """
        while True:
            player_id = secrets.token_hex(self.settings.player_id_bytes)
            if player_id not in self._player_ids:
                self._player_ids.add(player_id)
                return player_id

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """A player requested to create a new game (and possibly to take a seat in it)."""

        # The repository hands out the game ID, so start from a placeholder
        stored_game, game_id = self.repo.create_game(rules.create(game_id=""))
        logger.info("Created game %s", game_id)

        if request.player_id is None or request.color is None:
            return self._create_game_response(game_id, stored_game, viewer=None)

        with self.repo.lock(game_id):
            _, seated = rules.add_player(stored_game, request.player_id, request.color)
            self._store(game_id, seated)
        logger.info("Player %s took seat %s in game %s", request.player_id, request.color, game_id)
        return self._create_game_response(game_id, seated, viewer=request.player_id)

    def join_game(self, request: JoinGameRequest) -> JoinGameResponse:
        """A player requested to take a seat in an existing game."""
        with self.repo.lock(request.game_id):
            game = self._fetch_game(request.game_id)
            seat_result, game = rules.add_player(game, request.player_id, request.color)
            if seat_result.success:
                self._store(request.game_id, game)
                logger.info(
                    "Player %s took seat %s in game %s",
                    request.player_id,
                    request.color,
                    request.game_id,
                )

        return JoinGameResponse(
            seat_result=seat_result,
            **self._response_fields(request.game_id, game, viewer=request.player_id),
        )

    def get_game(self, request: GetGameRequest) -> GameResponse:
        """Retrieve current game state, as seen by the (optional) player asking."""
        game = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game, viewer=request.player_id)

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        The game stays locked from reading the state until the new state is stored,
        so two simultaneous attempts can never both succeed against the same position.
        A rejected move is not an error: the response carries the reason.
        """
        move = to_domain_move(request.move)
        with self.repo.lock(request.game_id):
            game = self._fetch_game(request.game_id)
            move_result, after_move = rules.execute_move(game, request.player_id, move)
            if move_result.success:
                self._store(request.game_id, after_move)
                logger.info("Game %s: player %s played %r", request.game_id, request.player_id, move)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Game %s board:\n%s", request.game_id, after_move.board.to_pretty_string())
            else:
                logger.debug(
                    "Game %s: rejected %r by player %s: %s",
                    request.game_id,
                    move,
                    request.player_id,
                    move_result.message,
                )

        return MoveResponse(
            move_result=move_result,
            **self._response_fields(request.game_id, after_move, viewer=request.player_id),
        )

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Retrieve set of legal moves of the player's color (whether or not it is their turn)."""
        game = self._fetch_game(request.game_id)
        color = game.player_color(request.player_id)
        if color is None:
            raise InvalidRequestError(
                f"Player {request.player_id!r} holds no seat in game {request.game_id!r}."
            )
        return LegalMovesResponse(
            game_id=request.game_id,
            player_id=request.player_id,
            color=color,
            legal_moves=[to_move_data(move) for move in legal_moves(game, color)],
        )

    def wait_for_update(self, request: WaitForUpdateRequest) -> UpdateResponse:
        """
        Long polling.
        ----

        Used by the frontend to wait for the opponent's move: returns as soon as the game's version moved past
        `since_version`, or when the timeout (default from Settings) passes with `changed` set to False.
        """
        timeout = request.timeout or self.settings.long_poll_timeout
        version = self.repo.wait_for_change(request.game_id, request.since_version, timeout)
        if version is None:
            raise GameNotFoundError(f"Game with game_id={request.game_id!r} not found.")

        game = self._fetch_game(request.game_id)
        return UpdateResponse(
            changed=version > request.since_version,
            **self._response_fields(request.game_id, game, viewer=request.player_id),
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(request.game_id) is None:
            raise GameNotFoundError(f"Game with game_id={request.game_id!r} not found.")
        logger.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _response_fields(self, game_id: str, game: GameState, viewer: Optional[str]) -> dict:
        version = self.repo.version(game_id)
        return {
            "version": version if version is not None else 0,
            "game_status": to_viewer_snapshot(game, viewer),
        }

    def _create_game_response(self, game_id: str, game: GameState, viewer: Optional[str]) -> GameResponse:
        return GameResponse(**self._response_fields(game_id, game, viewer))

    def _fetch_game(self, game_id: str) -> GameState:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game

    def _store(self, game_id: str, game: GameState) -> None:
        if self.repo.update_game(game_id, game) is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")


# -- Conversions between request data and domain moves --
def _to_square(position: SquarePosition) -> Square:
    return Square(position.rank, position.file)


def _to_position(square: Square) -> SquarePosition:
    return SquarePosition(rank=square.rank, file=square.file)


def to_domain_move(data: MoveData) -> Move:
    if data.castling is not None:
        return CastleMove(data.castling)
    # for the type checker: MoveData validation guarantees both squares are present
    assert data.from_square is not None and data.to_square is not None
    return PieceMove(_to_square(data.from_square), _to_square(data.to_square), data.promote_to)


def to_move_data(move: Move) -> MoveData:
    if isinstance(move, CastleMove):
        return MoveData(castling=move.side)
    return MoveData(
        from_square=_to_position(move.from_square),
        to_square=_to_position(move.to_square),
        promote_to=move.promote_to,
    )
