from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import sqlalchemy as sa

from keyset.infra.database.alchemy import entity
from keyset.infra.database.alchemy.connection import ConnectionFactory


async def insert_posts(connection: ConnectionFactory, rows: Sequence[Mapping[str, Any]]) -> None:
    async with connection() as session:
        await session.execute(
            sa.insert(entity.Post),
            [{"updated_at": row["created_at"], **row} for row in rows],
        )
        await session.commit()
