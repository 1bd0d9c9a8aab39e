from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from keyset.app.contracts import exceptions as exc
from keyset.app.contracts.pagination import Sort
from keyset.app.contracts.predicate import Expr
from keyset.infra.database.alchemy.entity import Entity
from keyset.infra.database.alchemy.queries.scan import Scan


log = logging.getLogger(__name__)


class AlchemyRecordStore[E: Entity]:
    """Record store backed by a SQLAlchemy entity.

    Each scan opens its own session from the factory and closes it before
    returning, so one store can serve concurrent requests.
    """

    __slots__ = ("_entity", "_session_factory")

    def __init__(self, session_factory: Callable[[], AsyncSession], entity: type[E]) -> None:
        self._session_factory = session_factory
        self._entity = entity

    @property
    def entity(self) -> type[E]:
        return self._entity

    async def scan(
        self,
        where: Expr | None,
        order_by: Sequence[Sort],
        limit: int,
    ) -> Sequence[E]:
        query = Scan[E](self._entity, where, order_by, limit)
        try:
            async with self._session_factory() as session:
                return await query(session)
        except SQLAlchemyError as e:
            log.error("Scan of %s failed: %s", self._entity.__name__, e)
            raise exc.StorageError(
                detail=e._message().split(":", 1)[-1].strip(),  # noqa: SLF001
                entity=self._entity.__name__,
            ) from e
