"""Recognized options of the three pagination operations.

Unknown option names and wrongly typed values are rejected when the options
are built from a mapping; inconsistent combinations are rejected on creation.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, get_args, override

from keyset.app.contracts import exceptions as exc
from keyset.app.contracts.pagination import SortOrder
from keyset.app.contracts.predicate import Expr

from .base import StrictBaseDTO


def _validate_limit(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise exc.InvalidArgumentsError(f"`{name}` must be a positive integer", argument=name)


def _validate_order(value: Any) -> None:
    if value not in get_args(SortOrder.__value__):
        raise exc.InvalidArgumentsError("`order` must be either ASC or DESC", argument="order")


def _validate_filter(value: Any) -> None:
    if value is not None and not isinstance(value, Expr | Mapping):
        raise exc.InvalidArgumentsError(
            "`filter` must be a predicate or a mapping of equality filters",
            argument="filter",
        )


class PageOptions(StrictBaseDTO):
    # cursor: token returned as `next_cursor` by the previous page; None starts from the top
    cursor: str | None = None
    # limit: page size; None uses the configured default, larger values are clamped
    limit: int | None = None
    # order: direction of the walk over the sort key and the identity
    order: SortOrder = "DESC"
    # filter: predicate or equality mapping combined with the cursor condition
    filter: Any = None

    @override
    def _validate(self) -> None:
        _validate_limit("limit", self.limit)
        _validate_order(self.order)
        _validate_filter(self.filter)


class IdPageOptions(PageOptions): ...


class FieldPageOptions(PageOptions):
    # sort_field: primary sort key; None uses the configured default
    sort_field: str | None = None

    @override
    def _validate(self) -> None:
        super()._validate()
        if self.sort_field is not None and not self.sort_field:
            raise exc.InvalidArgumentsError("`sort_field` must not be empty", argument="sort_field")


class ConnectionOptions(StrictBaseDTO):
    after: str | None = None
    before: str | None = None
    first: int | None = None
    last: int | None = None
    sort_field: str | None = None
    # order: direction of "forward" (`after`/`first`) traversal
    order: SortOrder = "DESC"
    filter: Any = None

    @override
    def _validate(self) -> None:
        if self.first is not None and self.last is not None:
            raise exc.InvalidArgumentsError('Specify either "first" or "last", not both')
        if self.first is None and self.last is None:
            raise exc.InvalidArgumentsError('One of "first" or "last" is required')
        if self.after is not None and self.before is not None:
            raise exc.InvalidArgumentsError('Cannot use "after" and "before" cursors together')
        if self.after is not None and self.last is not None:
            raise exc.InvalidArgumentsError('"after" can only be combined with "first"')
        if self.before is not None and self.first is not None:
            raise exc.InvalidArgumentsError('"before" can only be combined with "last"')

        _validate_limit("first", self.first)
        _validate_limit("last", self.last)
        _validate_order(self.order)
        _validate_filter(self.filter)
        if self.sort_field is not None and not self.sort_field:
            raise exc.InvalidArgumentsError("`sort_field` must not be empty", argument="sort_field")

    @property
    def is_forward(self) -> bool:
        return self.last is None

    @property
    def size(self) -> int:
        size = self.first if self.first is not None else self.last
        assert size is not None
        return size

    @property
    def cursor(self) -> str | None:
        return self.after if self.is_forward else self.before
