"""Unit tests for src/core/config.py"""

import logging

import pytest
from pydantic import ValidationError

from src.core.config import Settings, configure_logging


def test_defaults() -> None:
    settings = Settings()
    assert settings.log_level == "INFO"
    assert settings.long_poll_timeout == 30.0
    assert settings.player_id_bytes == 8


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESS_LOG_LEVEL", "debug")
    monkeypatch.setenv("CHESS_LONG_POLL_TIMEOUT", "2.5")
    monkeypatch.delenv("CHESS_PLAYER_ID_BYTES", raising=False)

    settings = Settings.from_env()
    assert settings.log_level == "DEBUG"
    assert settings.long_poll_timeout == 2.5
    assert settings.player_id_bytes == 8


@pytest.mark.parametrize(
    "fields",
    [
        {"log_level": "LOUD"},
        {"long_poll_timeout": 0},
        {"player_id_bytes": 2},
    ],
)
def test_invalid_settings(fields: dict) -> None:
    with pytest.raises(ValidationError):
        _ = Settings(**fields)


def test_invalid_env_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESS_PLAYER_ID_BYTES", "many")
    with pytest.raises(ValidationError):
        _ = Settings.from_env()


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging(Settings(log_level="warning"))
    assert len(calls) == 1
    assert calls[0]["level"] == "WARNING"
