"""Application settings and logging setup."""

import logging
import os
from typing import Self

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "CHESS_"


class Settings(BaseModel):
    """Knobs of the hosting layer. The rules engine itself has no configuration."""

    log_level: str = "INFO"
    long_poll_timeout: float = Field(default=30.0, gt=0)
    player_id_bytes: int = Field(default=8, ge=4, le=32)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls) -> Self:
        """Read CHESS_LOG_LEVEL, CHESS_LONG_POLL_TIMEOUT and CHESS_PLAYER_ID_BYTES (unset variables keep their default)."""
        values = {
            name: os.environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in os.environ
        }
        return cls.model_validate(values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
