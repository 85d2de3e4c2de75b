"""
Logger Configuration.

Settings are read from ``LIBLOGGER_*`` environment variables (and an
optional ``.env`` file) every time a logger is built. There is no
process-wide settings singleton; pass an explicit ``LoggerSettings`` to
``new()`` through ``with_settings`` to bypass the environment.
"""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from liblogger.logger.levels import Level


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"


class LoggerSettings(BaseSettings):
    """Logger construction defaults."""

    model_config = SettingsConfigDict(
        env_prefix="LIBLOGGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: Level = Field(default=Level.INFO, description="Minimum level written by the logger")
    format: LogFormat = Field(default=LogFormat.JSON, description="Output format (json, console)")
    add_caller: bool = Field(default=True, description="Annotate entries with the call site")
    stacktrace_level: Level = Field(
        default=Level.ERROR,
        description="Entries at or above this level carry a stack trace",
    )

    @field_validator("level", "stacktrace_level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> Level:
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        return Level.parse(value)
