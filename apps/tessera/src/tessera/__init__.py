"""
tessera: compact signed, expiring tokens.

    from tessera import ExpiringPayload, create_token, expires_in, verify_token

    class Session(ExpiringPayload):
        user_id: str

    token = create_token(Session(user_id="u1", exp=expires_in(600)), secret)
    session = verify_token(secret, token, Session)

Tokens are signed, not encrypted: anyone holding one can read its payload.
Use a secret with at least 32 bytes of entropy.
"""

from .tokens import (
    DecodingError,
    EncodingError,
    Expirable,
    ExpiredTokenError,
    ExpiringPayload,
    InvalidSignatureError,
    MalformedEncodingError,
    MalformedTokenError,
    TokenCodec,
    TokenError,
    create_token,
    decode_token,
    expires_in,
    verify_token,
)

__all__ = [
    "TokenCodec",
    "create_token",
    "decode_token",
    "verify_token",
    "expires_in",
    "Expirable",
    "ExpiringPayload",
    "TokenError",
    "EncodingError",
    "MalformedEncodingError",
    "MalformedTokenError",
    "DecodingError",
    "InvalidSignatureError",
    "ExpiredTokenError",
]
