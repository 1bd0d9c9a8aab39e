from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from keyset.app.contracts.pagination import Sort
from keyset.app.contracts.predicate import Expr
from keyset.infra.database.alchemy.entity import Entity
from keyset.infra.database.alchemy.tools import to_clause, to_order_by


class Scan[E: Entity]:
    __slots__ = (
        "clauses",
        "entity",
        "limit",
        "order_by",
    )

    def __init__(
        self,
        entity: type[E],
        where: Expr | None,
        order_by: Sequence[Sort],
        limit: int,
    ) -> None:
        self.entity = entity
        self.limit = limit
        self.order_by = to_order_by(entity, order_by)
        self.clauses: list[sa.ColumnExpressionArgument[bool]] = (
            [to_clause(entity, where)] if where is not None else []
        )

    async def __call__(self, conn: AsyncSession, /, **kw: Any) -> Sequence[E]:
        result = await conn.scalars(self.make_stmt(), params=kw.pop("params", None))

        return result.all()

    def make_stmt(self) -> sa.Select[tuple[E]]:
        return (
            sa.select(self.entity)
            .where(*self.clauses)
            .order_by(*self.order_by)
            .limit(self.limit)
        )
