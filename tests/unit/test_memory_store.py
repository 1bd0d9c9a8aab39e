from __future__ import annotations

import pytest

from keyset.app.contracts.pagination import Sort
from keyset.app.contracts.predicate import And, Compare, Op, and_, from_filters, or_, ref
from keyset.app.contracts.storage import RecordStore
from keyset.infra.storage.memory import InMemoryRecordStore, evaluate, sort_records


pytestmark = pytest.mark.anyio

RECORDS = [
    {"id": 1, "score": 5, "status": "draft"},
    {"id": 2, "score": None, "status": "published"},
    {"id": 3, "score": 10, "status": "published"},
    {"id": 4, "score": 5, "status": "published"},
    {"id": 5, "score": None, "status": "archived"},
]


def _ids(records: list[dict[str, object]]) -> list[int]:
    return [r["id"] for r in records]  # type: ignore[misc]


def test_and_or_flatten_and_drop_empty_operands() -> None:
    a, b, c = ref("a").eq(1), ref("b").eq(2), ref("c").eq(3)

    assert and_(a, None, b & c) == And((a, b, c))
    assert and_(None, a) == a
    assert and_() is None
    assert or_(None, None) is None
    assert ~a == ~a


def test_from_filters_skips_none_values() -> None:
    assert from_filters({"status": "published", "author": None}) == Compare(
        "status", Op.EQ, "published"
    )
    assert from_filters(None) is None
    assert from_filters({}) is None


def test_empty_field_name_is_rejected() -> None:
    with pytest.raises(ValueError):
        ref("")


@pytest.mark.parametrize(
    ("expr", "expected"),
    [
        (ref("score").eq(5), [1, 4]),
        (ref("score").is_null(), [2, 5]),
        (ref("score").is_not_null(), [1, 3, 4]),
        (ref("score").ne(5), [3]),
        (ref("score").lt(10), [1, 4]),
        (ref("score").ge(5), [1, 3, 4]),
        (ref("status").in_(["draft", "archived"]), [1, 5]),
        (~ref("score").is_null() & ref("status").eq("published"), [3, 4]),
        (ref("score").gt(5) | ref("score").is_null(), [2, 3, 5]),
        (None, [1, 2, 3, 4, 5]),
    ],
)
def test_evaluate_follows_sql_null_semantics(expr: object, expected: list[int]) -> None:
    assert [r["id"] for r in RECORDS if evaluate(expr, r)] == expected  # type: ignore[arg-type]


def test_nulls_rank_lowest() -> None:
    asc = sort_records(RECORDS, (Sort("score", "ASC"), Sort("id", "ASC")))
    desc = sort_records(RECORDS, (Sort("score", "DESC"), Sort("id", "DESC")))

    assert _ids(asc) == [2, 5, 1, 4, 3]
    assert _ids(desc) == [3, 4, 1, 5, 2]


async def test_scan_filters_orders_and_limits() -> None:
    store = InMemoryRecordStore(RECORDS)

    result = await store.scan(ref("status").eq("published"), (Sort("id", "DESC"),), 2)

    assert isinstance(store, RecordStore)
    assert _ids(list(result)) == [4, 3]


async def test_scan_sees_records_added_between_calls() -> None:
    store = InMemoryRecordStore(RECORDS)
    store.records.append({"id": 6, "score": 1, "status": "published"})

    result = await store.scan(None, (Sort("id", "DESC"),), 1)

    assert _ids(list(result)) == [6]
