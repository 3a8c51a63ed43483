"""HMAC-SHA256 signing and constant-time verification."""

from __future__ import annotations

import hmac
from hashlib import sha256

from pydantic import SecretBytes, SecretStr

from .constants import DIGEST_SIZE
from .types import Secret


def key_bytes(secret: Secret) -> bytes:
    """Normalize a caller supplied secret to the raw HMAC key."""
    if isinstance(secret, (SecretStr, SecretBytes)):
        secret = secret.get_secret_value()
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return bytes(secret)
    raise TypeError(f"secret must be str or bytes, not {type(secret).__name__}")


def sign(key: Secret, message: bytes) -> bytes:
    """Return the 32-byte HMAC-SHA256 digest of `message`."""
    return hmac.new(key_bytes(key), message, sha256).digest()


def verify(key: Secret, message: bytes, candidate: bytes) -> bool:
    """Check `candidate` against the digest of `message`.

    A candidate of the wrong length is a mismatch, not an error. Equal-length
    candidates are compared with `hmac.compare_digest`, whose running time does
    not depend on where the first differing byte is.
    """
    if len(candidate) != DIGEST_SIZE:
        return False
    return hmac.compare_digest(sign(key, message), candidate)
