"""Storage-neutral filter expressions.

A predicate is a tree of immutable nodes:

    ref("status").eq("published") & (ref("score").gt(10) | ref("score").is_null())

Every :class:`~keyset.app.contracts.storage.RecordStore` translates the tree into its own
query language. `Compare(field, EQ, None)` means "field is null" and
`Compare(field, NE, None)` means "field is not null".
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from typing import Any

import msgspec


@enum.unique
class Op(enum.StrEnum):
    EQ = enum.auto()
    NE = enum.auto()
    LT = enum.auto()
    LE = enum.auto()
    GT = enum.auto()
    GE = enum.auto()
    IN = enum.auto()


class Expr(msgspec.Struct, frozen=True, tag_field="kind", tag=str.lower):
    def __and__(self, other: Expr) -> Expr:
        result = and_(self, other)
        assert result is not None
        return result

    def __or__(self, other: Expr) -> Expr:
        result = or_(self, other)
        assert result is not None
        return result

    def __invert__(self) -> Expr:
        return Not(self)


class Compare(Expr):
    field: str
    op: Op
    value: Any = None


class And(Expr):
    operands: tuple[Expr, ...]


class Or(Expr):
    operands: tuple[Expr, ...]


class Not(Expr):
    operand: Expr


class FieldRef:
    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("Field name must not be empty")
        self.name = name

    def eq(self, value: Any) -> Compare:
        return Compare(self.name, Op.EQ, value)

    def ne(self, value: Any) -> Compare:
        return Compare(self.name, Op.NE, value)

    def lt(self, value: Any) -> Compare:
        return Compare(self.name, Op.LT, value)

    def le(self, value: Any) -> Compare:
        return Compare(self.name, Op.LE, value)

    def gt(self, value: Any) -> Compare:
        return Compare(self.name, Op.GT, value)

    def ge(self, value: Any) -> Compare:
        return Compare(self.name, Op.GE, value)

    def in_(self, values: Iterable[Any]) -> Compare:
        return Compare(self.name, Op.IN, tuple(values))

    def is_null(self) -> Compare:
        return Compare(self.name, Op.EQ, None)

    def is_not_null(self) -> Compare:
        return Compare(self.name, Op.NE, None)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


def ref(name: str) -> FieldRef:
    return FieldRef(name)


def _flatten[T: (And, Or)](kind: type[T], operands: Iterable[Expr | None]) -> list[Expr]:
    flat: list[Expr] = []
    for operand in operands:
        if operand is None:
            continue
        if isinstance(operand, kind):
            flat.extend(operand.operands)
        else:
            flat.append(operand)

    return flat


def and_(*operands: Expr | None) -> Expr | None:
    flat = _flatten(And, operands)
    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]

    return And(tuple(flat))


def or_(*operands: Expr | None) -> Expr | None:
    flat = _flatten(Or, operands)
    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]

    return Or(tuple(flat))


def from_filters(filters: Expr | Mapping[str, Any] | None) -> Expr | None:
    """Normalize a caller-supplied filter.

    Mappings are read as equality filters; keys with `None` values are skipped.
    """
    if filters is None or isinstance(filters, Expr):
        return filters

    return and_(*(Compare(k, Op.EQ, v) for k, v in filters.items() if v is not None))
