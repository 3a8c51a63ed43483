"""
Token Pipeline Configuration.

Only operational limits live here. Secrets are always passed per call and are
never read from the environment.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_MAX_TOKEN_LENGTH = 8192


class TokenSettings(BaseSettings):
    """Limits applied by `TokenCodec.from_settings`."""

    model_config = SettingsConfigDict(
        env_prefix="TESSERA_TOKEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    max_length: int = Field(
        default=DEFAULT_MAX_TOKEN_LENGTH,
        ge=0,
        description="Reject tokens longer than this many characters before decoding (0 disables)",
    )

    @property
    def length_limit(self) -> int | None:
        return self.max_length or None
