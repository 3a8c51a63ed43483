"""
Tessera Configuration Module.

Nested settings: each sub-module is an independent concern with its own
environment variable prefix, read from the process environment and `.env`.

Usage:
    from tessera.config import settings

    settings.logging.level
    settings.tokens.max_length

The token pipeline itself never reads these settings; they are consumed only
by the opt-in `configure_from_settings` and `TokenCodec.from_settings`.
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .logging import LoggingSettings
from .tokens import TokenSettings


class Settings(BaseSettings):
    """Composite settings aggregating all configuration domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @cached_property
    def tokens(self) -> TokenSettings:
        return TokenSettings()


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "LoggingSettings",
    "TokenSettings",
]
