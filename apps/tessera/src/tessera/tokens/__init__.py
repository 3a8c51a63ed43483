"""Signed, expiring tokens: serialization, HMAC-SHA256 signing and verification."""

from .exceptions import (
    DecodingError,
    EncodingError,
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedEncodingError,
    MalformedTokenError,
    TokenError,
)
from .expiration import current_timestamp, expires_in, is_expired
from .service import TokenCodec, create_token, decode_token, verify_token
from .types import Expirable, ExpiringPayload, Secret, TokenSegments

__all__ = [
    "TokenCodec",
    "create_token",
    "decode_token",
    "verify_token",
    "Expirable",
    "ExpiringPayload",
    "Secret",
    "TokenSegments",
    "current_timestamp",
    "expires_in",
    "is_expired",
    "TokenError",
    "EncodingError",
    "MalformedEncodingError",
    "MalformedTokenError",
    "DecodingError",
    "InvalidSignatureError",
    "ExpiredTokenError",
]
