from __future__ import annotations

import operator
from collections.abc import Callable, Iterable, Sequence
from functools import cmp_to_key
from typing import Any, Final

from keyset.app.contracts.pagination import Sort
from keyset.app.contracts.predicate import And, Compare, Expr, Not, Op, Or
from keyset.app.contracts.storage import get_field


_OPERATORS: Final[dict[Op, Callable[[Any, Any], bool]]] = {
    Op.LT: operator.lt,
    Op.LE: operator.le,
    Op.GT: operator.gt,
    Op.GE: operator.ge,
}


def _compare(record: Any, node: Compare) -> bool:
    value = get_field(record, node.field, None)
    match node.op:
        case Op.EQ:
            return value == node.value if node.value is not None else value is None
        case Op.NE:
            return value is not None and (node.value is None or value != node.value)
        case Op.IN:
            return value is not None and value in node.value
        case _:
            # null never satisfies an ordering comparison, as in SQL
            if value is None or node.value is None:
                return False
            return _OPERATORS[node.op](value, node.value)


def evaluate(expr: Expr | None, record: Any) -> bool:
    match expr:
        case None:
            return True
        case Compare():
            return _compare(record, expr)
        case And(operands=ops):
            return all(evaluate(op, record) for op in ops)
        case Or(operands=ops):
            return any(evaluate(op, record) for op in ops)
        case Not(operand=op):
            return not evaluate(op, record)
        case _:
            raise TypeError(f"Unsupported expression: {expr!r}")


def _cmp_values(left: Any, right: Any) -> int:
    # nulls rank below everything else
    if left is None or right is None:
        return (left is not None) - (right is not None)

    return (left > right) - (left < right)


def sort_records[R](records: Iterable[R], order_by: Sequence[Sort]) -> list[R]:
    def _cmp(left: R, right: R) -> int:
        for sort in order_by:
            result = _cmp_values(
                get_field(left, sort.field, None),
                get_field(right, sort.field, None),
            )
            if result:
                return -result if sort.order == "DESC" else result

        return 0

    return sorted(records, key=cmp_to_key(_cmp))


class InMemoryRecordStore[R]:
    """A record store over a Python list of mappings or objects.

    The list is read on every scan, so mutating it between calls behaves like
    concurrent writes to a real collection.
    """

    __slots__ = ("records",)

    def __init__(self, records: Iterable[R] = ()) -> None:
        self.records: list[R] = list(records)

    async def scan(
        self,
        where: Expr | None,
        order_by: Sequence[Sort],
        limit: int,
    ) -> Sequence[R]:
        matched = (record for record in self.records if evaluate(where, record))

        return sort_records(matched, order_by)[:limit]
