from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from typing import Any, Literal

from .predicate import Expr


type SortOrder = Literal["ASC", "DESC"]


def flip_order(order: SortOrder) -> SortOrder:
    return "ASC" if order == "DESC" else "DESC"


@dataclass(frozen=True, slots=True)
class _AsDict:
    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Sort:
    field: str
    order: SortOrder = "ASC"


@dataclass(frozen=True, slots=True)
class Cursor:
    value: Any
    id: Any


@dataclass(frozen=True, slots=True)
class ScanQuery:
    where: Expr | None
    order_by: tuple[Sort, ...]
    backward: bool = False


@dataclass(frozen=True, slots=True)
class Window[T]:
    items: Sequence[T]
    has_more: bool
    start_cursor: str | None
    end_cursor: str | None


@dataclass(frozen=True, slots=True)
class PageMeta(_AsDict):
    has_more: bool
    next_cursor: str | None
    limit: int
    count: int


@dataclass(frozen=True, slots=True)
class FieldPageMeta(PageMeta):
    sort_field: str
    order: SortOrder


@dataclass(frozen=True, slots=True)
class CursorPage[T, M: PageMeta](_AsDict):
    data: Sequence[T]
    pagination: M

    def map[O](self, f: Callable[[T], O]) -> CursorPage[O, M]:
        return CursorPage[O, M](data=[f(item) for item in self.data], pagination=self.pagination)


@dataclass(frozen=True, slots=True)
class PageInfo(_AsDict):
    has_next_page: bool
    has_previous_page: bool
    start_cursor: str | None
    end_cursor: str | None


@dataclass(frozen=True, slots=True)
class Connection[T](_AsDict):
    data: Sequence[T]
    page_info: PageInfo

    def map[O](self, f: Callable[[T], O]) -> Connection[O]:
        return Connection[O](data=[f(item) for item in self.data], page_info=self.page_info)
