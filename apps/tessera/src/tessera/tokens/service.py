"""
Token creation, inspection and verification.

Wire format::

    base64url(payload_bytes) "." base64url(HMAC-SHA256(secret, payload_bytes))

Verification walks a fixed sequence of checks and stops at the first failure:

    split/decode -> signature -> deserialize -> expiration

The signature is checked on the raw payload bytes before anything is
deserialized, so unauthenticated input never reaches pydantic validation.
Nothing is kept between calls: secrets, payloads and tokens live on the
call stack only.
"""

from __future__ import annotations

from typing import Any, Generic, Optional

from tessera.logging import get_logger

from . import assembler, base64url, signer
from .exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedEncodingError,
    MalformedTokenError,
    TokenError,
)
from .expiration import current_timestamp, expiration_of
from .serializer import PayloadSerializer
from .types import P, Secret

logger = get_logger("tessera.tokens.service")


def _decode_segment(name: str, text: str) -> bytes:
    try:
        return base64url.decode(text)
    except MalformedEncodingError as exc:
        raise MalformedEncodingError(reason=exc.details["reason"], segment=name) from exc


class TokenCodec(Generic[P]):
    """Create, inspect and verify tokens carrying payloads of one type.

    Args:
        payload_type: Any type pydantic can validate from a field mapping and
            that exposes `exp` (pydantic models, dataclasses, `dict`).
        max_length: Reject longer tokens with MalformedTokenError before any
            decoding. ``None`` disables the bound.
    """

    def __init__(self, payload_type: type[P], *, max_length: Optional[int] = None) -> None:
        if max_length is not None and max_length <= 0:
            raise ValueError("max_length must be positive or None")
        self._serializer: PayloadSerializer[P] = PayloadSerializer(payload_type)
        self.max_length = max_length

    @classmethod
    def from_settings(cls, payload_type: type[P], token_settings: Any = None) -> "TokenCodec[P]":
        """Build a codec whose length bound comes from `settings.tokens`."""
        if token_settings is None:
            from tessera.config import settings

            token_settings = settings.tokens
        return cls(payload_type, max_length=token_settings.length_limit)

    @property
    def payload_type(self) -> type[P]:
        return self._serializer.payload_type

    def create(self, payload: P, secret: Secret) -> str:
        """Sign `payload` and return the token.

        Raises:
            EncodingError: the payload is not of the codec's type or cannot be serialized.
        """
        payload_bytes = self._serializer.serialize(payload)
        signature = signer.sign(secret, payload_bytes)
        token = assembler.assemble(base64url.encode(payload_bytes), base64url.encode(signature))
        logger.debug("token_created", payload_type=self._serializer.type_name, length=len(token))
        return token

    def decode(self, token: str) -> P:
        """Read the payload WITHOUT checking the signature or the expiration.

        Unsafe for trust decisions: anyone can forge a token that decodes. Use
        it to inspect a token that was already verified, or for debugging.

        Raises:
            MalformedTokenError, MalformedEncodingError, DecodingError
        """
        payload_bytes, _ = self._split_and_decode(token)
        return self._serializer.deserialize(payload_bytes)

    def verify(self, secret: Secret, token: str, *, now: Optional[int] = None) -> P:
        """Authenticate `token` and return its payload.

        `now` defaults to the current Unix time, read at this call.

        Raises:
            MalformedTokenError, MalformedEncodingError: structural failures.
            InvalidSignatureError: tampered token or wrong secret.
            DecodingError: authentic bytes that do not fit the payload type.
            ExpiredTokenError: authentic payload with ``exp <= now``.
        """
        try:
            payload = self._verify(secret, token, now)
        except TokenError as exc:
            logger.info("token_rejected", code=exc.code, payload_type=self._serializer.type_name)
            raise
        logger.debug("token_verified", payload_type=self._serializer.type_name)
        return payload

    def _verify(self, secret: Secret, token: str, now: Optional[int]) -> P:
        payload_bytes, signature = self._split_and_decode(token)

        if not signer.verify(secret, payload_bytes, signature):
            raise InvalidSignatureError()

        payload = self._serializer.deserialize(payload_bytes)

        if now is None:
            now = current_timestamp()
        expires_at = expiration_of(payload)
        if expires_at <= now:
            raise ExpiredTokenError(expires_at=expires_at, now=now, payload=payload)
        return payload

    def _split_and_decode(self, token: str) -> tuple[bytes, bytes]:
        if self.max_length is not None and isinstance(token, str) and len(token) > self.max_length:
            raise MalformedTokenError(reason=f"token longer than {self.max_length} characters")
        segments = assembler.split(token)
        return _decode_segment("payload", segments.payload), _decode_segment("signature", segments.signature)


def create_token(payload: Any, secret: Secret) -> str:
    """Sign `payload` with `secret`; the payload's own type drives serialization."""
    return TokenCodec(type(payload)).create(payload, secret)


def decode_token(token: str, payload_type: type[P]) -> P:
    """Read a token's payload WITHOUT verifying it. See `TokenCodec.decode`."""
    return TokenCodec(payload_type).decode(token)


def verify_token(secret: Secret, token: str, payload_type: type[P], *, now: Optional[int] = None) -> P:
    """Verify `token` with `secret` and return its payload. See `TokenCodec.verify`."""
    return TokenCodec(payload_type).verify(secret, token, now=now)
