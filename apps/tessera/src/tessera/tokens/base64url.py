"""Unpadded base64url (RFC 4648 section 5) with strict, canonical decoding."""

from __future__ import annotations

import base64
import binascii
import re

from .exceptions import MalformedEncodingError

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    """Encode bytes as base64url text without `=` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(text: str) -> bytes:
    """Decode unpadded base64url text.

    Raises MalformedEncodingError for characters outside the URL-safe alphabet
    (padding included), for impossible lengths, and for non-canonical text
    whose unused trailing bits are not zero. Accepting only the canonical form
    means two different strings never decode to the same bytes.
    """
    if not isinstance(text, str):
        raise MalformedEncodingError(reason=f"expected text, got {type(text).__name__}")
    if _ALPHABET.fullmatch(text) is None:
        raise MalformedEncodingError(reason="character outside the base64url alphabet")
    if len(text) % 4 == 1:
        raise MalformedEncodingError(reason=f"invalid length {len(text)}")

    try:
        data = base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except (binascii.Error, ValueError) as exc:
        raise MalformedEncodingError(reason=str(exc)) from exc

    if encode(data) != text:
        raise MalformedEncodingError(reason="non-canonical trailing bits")
    return data
