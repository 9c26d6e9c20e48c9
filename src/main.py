"""Wires settings, logging, the game store and the service together."""

from typing import Optional

from src.core.config import Settings, configure_logging
from src.db.memory_repository import InMemoryGameRepository
from src.services.chess_service import ChessService


def build_service(settings: Optional[Settings] = None) -> ChessService:
    """Settings default to the CHESS_* environment variables."""
    settings = settings or Settings.from_env()
    configure_logging(settings)
    return ChessService(InMemoryGameRepository(), settings)
