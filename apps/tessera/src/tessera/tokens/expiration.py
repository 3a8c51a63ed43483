"""Expiration policy.

A token is expired when `exp <= now`: a token whose expiration equals the
current second is already expired. There is no clock-skew leeway.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from typing import Any, Optional

from .constants import EXPIRATION_FIELD, INT64_MAX, INT64_MIN

_MISSING = object()


def current_timestamp() -> int:
    """Current Unix time in whole seconds, read fresh on every call."""
    return int(time.time())


def expiration_of(payload: Any) -> int:
    """Read the expiration timestamp from an attribute or, for mappings, a key.

    Raises:
        TypeError: the payload has no `exp`, or it is not an integer.
        ValueError: `exp` does not fit in a signed 64-bit integer.
    """
    if isinstance(payload, Mapping):
        value = payload.get(EXPIRATION_FIELD, _MISSING)
    else:
        value = getattr(payload, EXPIRATION_FIELD, _MISSING)

    if value is _MISSING:
        raise TypeError(f"payload has no '{EXPIRATION_FIELD}' field")
    # bool is an int subclass but never a timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"'{EXPIRATION_FIELD}' must be an integer, got {type(value).__name__}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"'{EXPIRATION_FIELD}' is outside the signed 64-bit range")
    return value


def is_expired(payload: Any, now: int) -> bool:
    return expiration_of(payload) <= now


def expires_in(seconds: int, *, now: Optional[int] = None) -> int:
    """Expiration timestamp `seconds` from `now` (default: the current time)."""
    return (current_timestamp() if now is None else now) + seconds
