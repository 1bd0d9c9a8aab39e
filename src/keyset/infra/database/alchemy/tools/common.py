from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import sqlalchemy as sa
from sqlalchemy import orm

from keyset.app.contracts import exceptions as exc
from keyset.app.contracts.pagination import Sort
from keyset.app.contracts.predicate import And, Compare, Expr, Not, Op, Or


def get_column[E: orm.DeclarativeBase](model: type[E], name: str) -> orm.InstrumentedAttribute[Any]:
    columns = sa.inspect(model).column_attrs
    if name not in columns:
        raise exc.InvalidArgumentsError(
            f"Unknown field `{name}` for {model.__name__}",
            argument=name,
            allowed=sorted(columns.keys()),
        )

    return getattr(model, name)


def _compare_clause(column: orm.InstrumentedAttribute[Any], op: Op, value: Any) -> sa.ColumnElement[bool]:
    match op:
        case Op.EQ:
            return column.is_(None) if value is None else column == value
        case Op.NE:
            return column.is_not(None) if value is None else column != value
        case Op.IN:
            return column.in_(value)
        case Op.LT:
            return column < value
        case Op.LE:
            return column <= value
        case Op.GT:
            return column > value
        case Op.GE:
            return column >= value


def to_clause[E: orm.DeclarativeBase](model: type[E], expr: Expr) -> sa.ColumnElement[bool]:
    match expr:
        case Compare(field=name, op=op, value=value):
            return _compare_clause(get_column(model, name), op, value)
        case And(operands=ops):
            return sa.and_(*(to_clause(model, op) for op in ops))
        case Or(operands=ops):
            return sa.or_(*(to_clause(model, op) for op in ops))
        case Not(operand=op):
            return sa.not_(to_clause(model, op))
        case _:
            raise TypeError(f"Unsupported expression: {expr!r}")


def to_order_by[E: orm.DeclarativeBase](
    model: type[E],
    order_by: Sequence[Sort],
) -> list[sa.UnaryExpression[Any]]:
    # nulls rank below every value: first ascending, last descending
    return [
        get_column(model, sort.field).desc().nulls_last()
        if sort.order == "DESC"
        else get_column(model, sort.field).asc().nulls_first()
        for sort in order_by
    ]
