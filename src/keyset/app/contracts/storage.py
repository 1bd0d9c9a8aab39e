from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final, Protocol, runtime_checkable

from .pagination import Sort
from .predicate import Expr


MISSING: Final[Any] = object()


@runtime_checkable
class RecordStore[R](Protocol):
    async def scan(
        self,
        where: Expr | None,
        order_by: Sequence[Sort],
        limit: int,
    ) -> Sequence[R]: ...


def get_field(record: Any, name: str, default: Any = MISSING) -> Any:
    if isinstance(record, Mapping):
        if name in record:
            return record[name]
    elif hasattr(record, name):
        return getattr(record, name)

    if default is MISSING:
        raise KeyError(name)

    return default
