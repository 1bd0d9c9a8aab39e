"""Keyset (seek) query construction.

For ``ORDER BY created_at DESC, id DESC`` and a cursor at ``(t1, id1)`` the next
window is::

    WHERE created_at < t1 OR (created_at = t1 AND id < id1) OR created_at IS NULL

Null sort values rank below every other value, so they come first in
ascending walks and last in descending ones. Every store honours the same rule
when ordering.
"""

from __future__ import annotations

from keyset.app.contracts.pagination import Cursor, ScanQuery, Sort, SortOrder, flip_order
from keyset.app.contracts.predicate import Expr, and_, ref


class KeysetQueryBuilder:
    __slots__ = ("_id_field",)

    def __init__(self, id_field: str = "id") -> None:
        self._id_field = id_field

    @property
    def id_field(self) -> str:
        return self._id_field

    def build(
        self,
        *,
        order: SortOrder,
        cursor: Cursor | None = None,
        sort_field: str | None = None,
        where: Expr | None = None,
        backward: bool = False,
    ) -> ScanQuery:
        if sort_field == self._id_field:
            sort_field = None

        effective = flip_order(order) if backward else order
        order_by = (Sort(self._id_field, effective),)
        if sort_field:
            order_by = (Sort(sort_field, effective), *order_by)

        seek: Expr | None = None
        if cursor is not None:
            seek = (
                self.seek_by_field(sort_field, cursor, effective)
                if sort_field
                else self.seek_by_id(cursor, effective)
            )

        return ScanQuery(where=and_(where, seek), order_by=order_by, backward=backward)

    def seek_by_id(self, cursor: Cursor, order: SortOrder) -> Expr:
        id_ = ref(self._id_field)
        return id_.lt(cursor.id) if order == "DESC" else id_.gt(cursor.id)

    def seek_by_field(self, sort_field: str, cursor: Cursor, order: SortOrder) -> Expr:
        field = ref(sort_field)
        tie = self.seek_by_id(cursor, order)

        if cursor.value is None:
            null_tie = field.is_null() & tie
            return null_tie | field.is_not_null() if order == "ASC" else null_tie

        if order == "ASC":
            return field.gt(cursor.value) | (field.eq(cursor.value) & tie)

        return field.lt(cursor.value) | (field.eq(cursor.value) & tie) | field.is_null()


__all__ = ("KeysetQueryBuilder",)
