"""Canonical payload serialization.

Payloads are dumped through pydantic in JSON mode and encoded with orjson
using `OPT_SORT_KEYS`: compact UTF-8 JSON with keys sorted at every level.
The same logical payload therefore always yields the same bytes, whatever the
declaration order of its fields and whichever process produced it.

NaN and infinities have no JSON form and are rejected rather than written as
`null`, which would never validate back into a float field.
"""

from __future__ import annotations

import math
import types
from typing import Any, Generic, Union, get_origin

import orjson
from pydantic import TypeAdapter, ValidationError

from .exceptions import DecodingError, EncodingError
from .expiration import expiration_of
from .types import P

_DUMP_OPTIONS = orjson.OPT_SORT_KEYS


def _type_name(payload_type: Any) -> str:
    return getattr(payload_type, "__qualname__", None) or repr(payload_type)


def _runtime_class(payload_type: Any) -> type | None:
    """The class instances of `payload_type` must belong to, or None when it has none (unions, Annotated)."""
    origin = get_origin(payload_type) or payload_type
    if origin is Union or origin is types.UnionType or not isinstance(origin, type):
        return None
    if hasattr(origin, "__required_keys__"):  # TypedDict
        return dict
    return origin


def _find_non_finite(value: Any, path: str = "") -> str | None:
    if isinstance(value, float):
        return None if math.isfinite(value) else path or "<root>"
    if isinstance(value, dict):
        items = ((f"{path}.{key}" if path else str(key), item) for key, item in value.items())
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = ((f"{path}[{index}]", item) for index, item in enumerate(value))
    else:
        return None
    for item_path, item in items:
        found = _find_non_finite(item, item_path)
        if found is not None:
            return found
    return None


class PayloadSerializer(Generic[P]):
    """Serialize payloads of one type to canonical bytes and back."""

    def __init__(self, payload_type: type[P]) -> None:
        self.payload_type = payload_type
        self.type_name = _type_name(payload_type)
        self._adapter: TypeAdapter[P] = TypeAdapter(payload_type)
        self._runtime_class = _runtime_class(payload_type)

    def serialize(self, payload: P) -> bytes:
        """Canonical bytes for `payload`.

        Raises:
            EncodingError: the payload is not an instance of the payload type,
                has no usable `exp`, holds a value that cannot be represented
                in JSON (including NaN and infinities), or is not a field mapping.
        """
        if self._runtime_class is not None and not isinstance(payload, self._runtime_class):
            raise EncodingError(reason=f"expected {self.type_name}, got {type(payload).__qualname__}")

        try:
            expiration_of(payload)
        except (TypeError, ValueError) as exc:
            raise EncodingError(reason=str(exc)) from exc

        try:
            non_finite = _find_non_finite(self._adapter.dump_python(payload))
            document = self._adapter.dump_python(payload, mode="json")
        except (TypeError, ValueError) as exc:
            raise EncodingError(reason=f"{self.type_name} is not serializable: {exc}") from exc

        if non_finite is not None:
            raise EncodingError(reason=f"{non_finite} is not a finite number")
        if not isinstance(document, dict):
            raise EncodingError(reason=f"{self.type_name} must serialize to a field mapping")

        try:
            return orjson.dumps(document, option=_DUMP_OPTIONS)
        except orjson.JSONEncodeError as exc:
            raise EncodingError(reason=str(exc)) from exc

    def deserialize(self, data: bytes) -> P:
        """Rebuild a fresh payload from canonical bytes.

        Raises:
            DecodingError: the bytes are not a JSON object, fail validation for
                the payload type, or lack a valid `exp`.
        """
        try:
            document = orjson.loads(data)
        except orjson.JSONDecodeError as exc:
            raise DecodingError(reason=f"invalid JSON: {exc}", payload_type=self.type_name) from exc

        if not isinstance(document, dict):
            raise DecodingError(reason="payload is not a JSON object", payload_type=self.type_name)

        try:
            payload = self._adapter.validate_python(document)
        except ValidationError as exc:
            # error messages would echo input values; report the count only
            raise DecodingError(
                reason=f"{exc.error_count()} validation error(s)",
                payload_type=self.type_name,
            ) from exc

        try:
            expiration_of(payload)
        except (TypeError, ValueError) as exc:
            raise DecodingError(reason=str(exc), payload_type=self.type_name) from exc
        return payload
