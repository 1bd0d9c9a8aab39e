"""Opaque cursor tokens.

A token is the URL-safe base64 form (without padding) of a JSON payload::

    {"id": 16, "value": "2025-01-15T10:30:00+00:00", "id_type": "int", "value_type": "datetime"}

The type tags restore the exact Python types on decode. When a secret is
configured the token carries an HMAC-SHA256 signature after a dot:
``<payload>.<signature>``.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
import math
import uuid
from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any, Final

import msgspec

from keyset.app.contracts import exceptions as exc
from keyset.app.contracts.pagination import Cursor
from keyset.app.contracts.storage import get_field


if TYPE_CHECKING:
    from config.core import PaginationConfig


log = logging.getLogger(__name__)

SIGNATURE_SEPARATOR: Final[str] = "."
DEFAULT_SIGNATURE_SIZE: Final[int] = 16
_NON_IDENTITY_TYPES: Final[frozenset[str]] = frozenset(("none", "bool", "float"))


class CursorPayload(msgspec.Struct, forbid_unknown_fields=True):
    id: int | str
    id_type: str
    value: Any = None
    value_type: str = "none"


def _dump(value: Any) -> tuple[str, Any]:
    match value:
        case None:
            return "none", None
        case bool():
            return "bool", value
        case int():
            return "int", value
        case float():
            if not math.isfinite(value):
                raise exc.CursorEncodeError(f"Non-finite float cannot be stored in a cursor: {value}")
            return "float", value
        case str():
            return "str", value
        case datetime():
            return "datetime", value.isoformat()
        case date():
            return "date", value.isoformat()
        case time():
            return "time", value.isoformat()
        case uuid.UUID():
            return "uuid", str(value)
        case Decimal():
            return "decimal", str(value)
        case _:
            raise exc.CursorEncodeError(
                f"Unsupported cursor value type: {type(value).__name__}",
            )


def _load_str[T](parse: Callable[[str], T]) -> Callable[[Any], T]:
    def _load(raw: Any) -> T:
        if not isinstance(raw, str):
            raise TypeError(f"expected str, got {type(raw).__name__}")
        return parse(raw)

    return _load


def _load_none(raw: Any) -> None:
    if raw is not None:
        raise TypeError("expected null")


def _load_bool(raw: Any) -> bool:
    if not isinstance(raw, bool):
        raise TypeError(f"expected bool, got {type(raw).__name__}")
    return raw


def _load_int(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise TypeError(f"expected int, got {type(raw).__name__}")
    return raw


def _load_float(raw: Any) -> float:
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        raise TypeError(f"expected float, got {type(raw).__name__}")
    return float(raw)


_LOADERS: Final[dict[str, Callable[[Any], Any]]] = {
    "none": _load_none,
    "bool": _load_bool,
    "int": _load_int,
    "float": _load_float,
    "str": _load_str(str),
    "datetime": _load_str(datetime.fromisoformat),
    "date": _load_str(date.fromisoformat),
    "time": _load_str(time.fromisoformat),
    "uuid": _load_str(uuid.UUID),
    "decimal": _load_str(Decimal),
}


def _load(tag: str, raw: Any) -> Any:
    loader = _LOADERS.get(tag)
    if loader is None:
        raise ValueError(f"unknown type tag {tag!r}")

    try:
        return loader(raw)
    except InvalidOperation as e:
        raise ValueError(f"invalid decimal {raw!r}") from e


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(value: str) -> bytes:
    raw = value.encode("ascii")
    return base64.b64decode(raw + b"=" * (-len(raw) % 4), altchars=b"-_", validate=True)


class CursorCodec:
    __slots__ = (
        "_encoder",
        "_decoder",
        "_id_field",
        "_secret",
        "_signature_size",
    )

    def __init__(
        self,
        *,
        id_field: str = "id",
        secret: str | bytes | None = None,
        signature_size: int = DEFAULT_SIGNATURE_SIZE,
    ) -> None:
        if not 0 < signature_size <= hashlib.sha256().digest_size:
            raise ValueError("signature_size must be between 1 and 32 bytes")

        self._id_field = id_field
        self._secret = secret.encode() if isinstance(secret, str) else secret
        self._signature_size = signature_size
        self._encoder = msgspec.json.Encoder()
        self._decoder = msgspec.json.Decoder(CursorPayload)

    @classmethod
    def from_config(cls, config: PaginationConfig) -> CursorCodec:
        return cls(
            id_field=config.id_field,
            secret=config.cursor_secret or None,
            signature_size=config.signature_size,
        )

    @property
    def id_field(self) -> str:
        return self._id_field

    @property
    def is_signed(self) -> bool:
        return bool(self._secret)

    def encode(self, record: Any, sort_field: str | None = None) -> str:
        id_ = get_field(record, self._id_field, None)
        if id_ is None:
            raise exc.CursorEncodeError(f"Record has no `{self._id_field}` value")

        value = get_field(record, sort_field, None) if sort_field else None

        return self.encode_cursor(Cursor(value=value, id=id_))

    def encode_cursor(self, cursor: Cursor) -> str:
        try:
            id_type, id_ = _dump(cursor.id)
        except exc.CursorEncodeError:
            id_type, id_ = "str", str(cursor.id)
        if id_type in _NON_IDENTITY_TYPES:
            raise exc.CursorEncodeError(f"Unsupported identity type: {type(cursor.id).__name__}")
        value_type, value = _dump(cursor.value)

        try:
            data = self._encoder.encode(
                CursorPayload(id=id_, id_type=id_type, value=value, value_type=value_type),
            )
        except (TypeError, OverflowError, msgspec.EncodeError) as e:
            raise exc.CursorEncodeError(str(e)) from e

        token = _b64encode(data)
        if self._secret:
            token = f"{token}{SIGNATURE_SEPARATOR}{self._sign(token)}"

        return token

    def decode(self, token: str) -> Cursor:
        if not isinstance(token, str) or not token:
            raise self._reject(token, "cursor must be a non-empty string")

        try:
            payload = self._verify(token) if self._secret else token
            data = self._decoder.decode(_b64decode(payload))
            id_ = _load(data.id_type, data.id)
            value = _load(data.value_type, data.value)
        except exc.InvalidCursorError:
            raise
        except (UnicodeError, binascii.Error, msgspec.MsgspecError, TypeError, ValueError) as e:
            raise self._reject(token, str(e)) from e

        if data.id_type in _NON_IDENTITY_TYPES or id_ == "":
            raise self._reject(token, "missing identity")

        return Cursor(value=value, id=id_)

    def decode_optional(self, token: str | None) -> Cursor | None:
        return self.decode(token) if token is not None else None

    def _verify(self, token: str) -> str:
        payload, sep, signature = token.partition(SIGNATURE_SEPARATOR)
        if not sep or not hmac.compare_digest(signature.encode("ascii"), self._sign(payload).encode()):
            raise self._reject(token, "signature mismatch")

        return payload

    def _sign(self, payload: str) -> str:
        assert self._secret
        digest = hmac.new(self._secret, payload.encode("ascii"), hashlib.sha256).digest()
        return _b64encode(digest[: self._signature_size])

    @staticmethod
    def _reject(token: Any, reason: str) -> exc.InvalidCursorError:
        log.warning("Rejected cursor %.64r: %s", token, reason)
        return exc.InvalidCursorError(detail=reason)


__all__ = ("CursorCodec", "CursorPayload")
