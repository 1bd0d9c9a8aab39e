from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

from keyset.app.contracts.pagination import Sort
from keyset.app.contracts.predicate import Expr


BASE_TIME = datetime(2025, 1, 15, 10, 30, tzinfo=UTC)


def make_records(count: int, **overrides: Any) -> list[dict[str, Any]]:
    """Records with ids `1..count`; `created_at` grows with the id."""
    return [
        {
            "id": i,
            "title": f"post {i}",
            "status": "published",
            "author": "alice",
            "score": None,
            "created_at": BASE_TIME + timedelta(minutes=i),
            **overrides,
        }
        for i in range(1, count + 1)
    ]


def ids(items: Sequence[Any]) -> list[int]:
    return [item["id"] if isinstance(item, dict) else item.id for item in items]


class SpyStore:
    def __init__(self, records: Sequence[Any] = ()) -> None:
        self.records = list(records)
        self.calls: list[tuple[Expr | None, tuple[Sort, ...], int]] = []

    async def scan(self, where: Expr | None, order_by: Sequence[Sort], limit: int) -> Sequence[Any]:
        self.calls.append((where, tuple(order_by), limit))
        return self.records[:limit]


class FailingStore:
    def __init__(self, error: BaseException) -> None:
        self.error = error

    async def scan(self, where: Expr | None, order_by: Sequence[Sort], limit: int) -> Sequence[Any]:
        raise self.error
