from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, SecretBytes, SecretStr

from .constants import INT64_MAX, INT64_MIN

Secret = Union[str, bytes, bytearray, memoryview, SecretStr, SecretBytes]


@runtime_checkable
class Expirable(Protocol):
    """Anything exposing `exp`: a signed 64-bit Unix timestamp in seconds."""

    @property
    def exp(self) -> int: ...


P = TypeVar("P")


class ExpiringPayload(BaseModel):
    """Convenience base for pydantic payloads.

    Subclass and add fields. Unknown fields are ignored on decode so older
    readers keep accepting tokens from newer writers.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    exp: int = Field(ge=INT64_MIN, le=INT64_MAX, description="Expiration, Unix epoch seconds")


@dataclass(frozen=True)
class TokenSegments:
    """The two encoded halves of a token, before any decoding."""

    payload: str
    signature: str
