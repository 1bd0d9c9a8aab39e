from __future__ import annotations

from typing import Any

import pytest
import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from keyset.app.contracts import exceptions as exc
from keyset.app.contracts.pagination import SortOrder
from keyset.app.contracts.predicate import ref
from keyset.app.pagination import Paginator
from keyset.infra.database.alchemy import entity
from keyset.infra.database.alchemy.connection import ConnectionFactory
from keyset.infra.database.alchemy.queries.scan import Scan
from keyset.infra.database.alchemy.store import AlchemyRecordStore
from keyset.infra.storage.memory import InMemoryRecordStore
from tests.integration.utils import insert_posts
from tests.utils import ids, make_records


pytestmark = pytest.mark.anyio

SCORES = (5, None, 10, 5, None, 7, 5, None, 1, 10, 3, None)
AUTHORS = ("alice", None, "bob", "carol", None, "alice", "bob", "dave", None, "erin", "bob", "alice")


def _rows() -> list[dict[str, Any]]:
    rows = make_records(len(SCORES))
    for row, score, author in zip(rows, SCORES, AUTHORS, strict=True):
        row["score"] = score
        row["author"] = author
        row["status"] = "draft" if row["id"] % 4 == 0 else "published"
    return rows


async def _walk(paginator: Paginator[Any], **kw: Any) -> list[int]:
    seen: list[int] = []
    cursor = None
    while True:
        page = await paginator.paginate_by_field(cursor=cursor, **kw)
        seen.extend(ids(page.data))
        if not page.pagination.has_more:
            return seen
        cursor = page.pagination.next_cursor


async def test_first_page_from_sql(
    connection: ConnectionFactory, store: AlchemyRecordStore[entity.Post]
) -> None:
    await insert_posts(connection, make_records(25))

    page = await Paginator(store).paginate_by_id(limit=10)

    assert ids(page.data) == list(range(25, 15, -1))
    assert all(isinstance(post, entity.Post) for post in page.data)
    assert page.pagination.has_more


@pytest.mark.parametrize("sort_field", ["score", "author", "created_at", "title", "id"])
@pytest.mark.parametrize("order", ["ASC", "DESC"])
async def test_sql_and_memory_stores_agree(
    connection: ConnectionFactory,
    store: AlchemyRecordStore[entity.Post],
    sort_field: str,
    order: SortOrder,
) -> None:
    rows = _rows()
    await insert_posts(connection, rows)
    where = ref("status").eq("published")

    from_sql = await _walk(Paginator(store), sort_field=sort_field, order=order, limit=3, filter=where)
    from_memory = await _walk(
        Paginator(InMemoryRecordStore(rows)), sort_field=sort_field, order=order, limit=3, filter=where
    )

    assert from_sql == from_memory
    assert sorted(from_sql) == [row["id"] for row in rows if row["status"] == "published"]


async def test_bidirectional_walk_over_sql(
    connection: ConnectionFactory, store: AlchemyRecordStore[entity.Post]
) -> None:
    await insert_posts(connection, _rows())
    paginator = Paginator(store)

    first = await paginator.bidirectional_paginate(first=4, sort_field="score")
    second = await paginator.bidirectional_paginate(
        first=4, after=first.page_info.end_cursor, sort_field="score"
    )
    back = await paginator.bidirectional_paginate(
        last=4, before=second.page_info.start_cursor, sort_field="score"
    )

    assert ids(back.data) == ids(first.data)
    assert not back.page_info.has_previous_page
    assert second.page_info.has_previous_page


async def test_unknown_field_is_rejected(store: AlchemyRecordStore[entity.Post]) -> None:
    with pytest.raises(exc.InvalidArgumentsError) as e:
        await Paginator(store).paginate_by_field(sort_field="popularity")

    assert e.value.content["allowed"] == sorted(entity.Post.column_names())


async def test_database_errors_become_storage_errors(
    connection: ConnectionFactory, store: AlchemyRecordStore[entity.Post]
) -> None:
    async with connection.engine.begin() as conn:
        await conn.run_sync(entity.Entity.metadata.drop_all)

    with pytest.raises(exc.StorageError) as e:
        await Paginator(store).paginate_by_id()

    assert e.value.content["entity"] == "Post"


async def test_scan_statement(connection: ConnectionFactory) -> None:
    query = Scan(entity.Post, ref("status").eq("published"), (), 5)

    async with connection() as session:
        assert isinstance(session, AsyncSession)
        assert list(await query(session)) == []

    compiled = str(query.make_stmt().compile(compile_kwargs={"literal_binds": True}))
    assert "LIMIT 5" in compiled
    assert "post.status = 'published'" in compiled


async def test_entity_as_dict(connection: ConnectionFactory) -> None:
    await insert_posts(connection, make_records(1))

    async with connection() as session:
        post = await session.scalar(sa.select(entity.Post))

    assert post is not None
    assert post.as_dict()["title"] == "post 1"
    assert set(post.as_dict()) == set(entity.Post.column_names())
