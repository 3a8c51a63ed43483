"""
Token 模块统一异常体系

Every failure of the token pipeline maps to exactly one of the concrete kinds
below so callers can branch on tampered vs expired vs malformed input:

- malformed (reject): MalformedTokenError, MalformedEncodingError, DecodingError
- forged or wrong secret (reject): InvalidSignatureError
- authentic but too old (refresh): ExpiredTokenError
- caller-side payload defect at creation: EncodingError

`details` only ever holds values that are safe to log: no secrets, no token
text, no payload contents.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TokenError(ValueError):
    """Token 模块基础异常类

    所有 token 相关异常的根节点，便于统一捕获。
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class EncodingError(TokenError):
    """The payload could not be serialized (caller-side data defect)."""

    def __init__(self, *, reason: str) -> None:
        super().__init__(
            f"Payload could not be encoded: {reason}",
            code="ENCODING_ERROR",
            details={"reason": reason},
        )


class MalformedEncodingError(TokenError):
    """A segment was not valid unpadded base64url text."""

    def __init__(self, *, reason: str, segment: Optional[str] = None) -> None:
        details: Dict[str, Any] = {"reason": reason}
        if segment:
            details["segment"] = segment
            message = f"Token {segment} segment is not valid base64url: {reason}"
        else:
            message = f"Invalid base64url text: {reason}"
        super().__init__(message, code="MALFORMED_ENCODING", details=details)


class MalformedTokenError(TokenError):
    """The token did not split into exactly two non-empty segments."""

    def __init__(self, *, reason: str) -> None:
        super().__init__(
            f"Malformed token: {reason}",
            code="MALFORMED_TOKEN",
            details={"reason": reason},
        )


class DecodingError(TokenError):
    """Authenticated (or unverified) bytes did not parse into the payload type."""

    def __init__(self, *, reason: str, payload_type: Optional[str] = None) -> None:
        details: Dict[str, Any] = {"reason": reason}
        if payload_type:
            details["payload_type"] = payload_type
        super().__init__(f"Payload could not be decoded: {reason}", code="DECODING_ERROR", details=details)


class InvalidSignatureError(TokenError):
    """签名不匹配

    Raised for tampered tokens and for tokens signed with another secret. The
    two cases are indistinguishable.
    """

    def __init__(self) -> None:
        super().__init__("Token signature is invalid", code="INVALID_SIGNATURE")


class ExpiredTokenError(TokenError):
    """The signature is valid but the expiration timestamp is at or before now.

    `payload` holds the authenticated payload so callers can refresh it.
    """

    def __init__(self, *, expires_at: int, now: int, payload: Any = None) -> None:
        super().__init__(
            f"Token expired at {expires_at} (now {now})",
            code="TOKEN_EXPIRED",
            details={"expires_at": expires_at, "now": now},
        )
        self.expires_at = expires_at
        self.now = now
        self.payload = payload


__all__ = [
    "TokenError",
    "EncodingError",
    "MalformedEncodingError",
    "MalformedTokenError",
    "DecodingError",
    "InvalidSignatureError",
    "ExpiredTokenError",
]
