from __future__ import annotations

import inspect
import uuid
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Final

import msgspec


# kept as Python objects instead of being lowered to JSON-friendly values
BUILTIN_TYPES: Final[tuple[type, ...]] = (
    bytes,
    bytearray,
    datetime,
    date,
    time,
    timedelta,
    uuid.UUID,
    Decimal,
)


def convert_to[T](cls: type[T], value: Any, **kw: Any) -> T:
    return msgspec.convert(value, cls, builtin_types=BUILTIN_TYPES, **kw)


def msgspec_encoder(obj: Any, *args: Any, **kw: Any) -> str:
    return msgspec.json.encode(obj, *args, **kw).decode(encoding="utf-8")


def msgspec_decoder(obj: Any, *args: Any, **kw: Any) -> Any:
    return msgspec.json.decode(obj, *args, **kw)


def singleton[T](value: T) -> Callable[[], T]:
    def _factory() -> T:
        return value

    return _factory


class ClosableProxy:
    """Wraps a resource kept in application state so shutdown can close it."""

    __slots__ = (
        "_close_fn",
        "_target",
    )

    def __init__(self, target: Any, close_fn: Callable[[], Any]) -> None:
        self._target = target
        self._close_fn = close_fn

    async def close(self) -> None:
        result = self._close_fn()
        if inspect.isawaitable(result):
            await result

    def __getattr__(self, key: str) -> Any:
        return getattr(self._target, key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._target!r})"
