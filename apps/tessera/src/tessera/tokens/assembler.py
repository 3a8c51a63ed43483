"""Structural joining and splitting of the two token segments."""

from __future__ import annotations

from .constants import DELIMITER
from .exceptions import MalformedTokenError
from .types import TokenSegments


def assemble(encoded_payload: str, encoded_signature: str) -> str:
    return f"{encoded_payload}{DELIMITER}{encoded_signature}"


def split(token: str) -> TokenSegments:
    """Split a token into its payload and signature segments.

    Purely structural: the segments are not decoded or checked here.
    """
    if not isinstance(token, str):
        raise MalformedTokenError(reason=f"expected text, got {type(token).__name__}")

    count = token.count(DELIMITER)
    if count != 1:
        raise MalformedTokenError(reason=f"expected exactly one '{DELIMITER}' delimiter, found {count}")

    payload, signature = token.split(DELIMITER)
    if not payload:
        raise MalformedTokenError(reason="empty payload segment")
    if not signature:
        raise MalformedTokenError(reason="empty signature segment")
    return TokenSegments(payload=payload, signature=signature)
