from __future__ import annotations

import logging
from typing import Any

from keyset.app.contracts import exceptions as exc
from keyset.app.contracts.pagination import ScanQuery, Window
from keyset.app.contracts.storage import RecordStore

from .codec import CursorCodec


log = logging.getLogger(__name__)


class PageAssembler:
    """Run a keyset scan with one probe record and shape the window.

    The store is asked for ``limit + 1`` records; a full answer means more data
    exists past the window. Backward scans run in flipped order and are
    reversed back into display order here.
    """

    __slots__ = ("_codec",)

    def __init__(self, codec: CursorCodec) -> None:
        self._codec = codec

    async def assemble[R](
        self,
        store: RecordStore[R],
        query: ScanQuery,
        limit: int,
        *,
        sort_field: str | None = None,
    ) -> Window[R]:
        log.debug(
            "Scanning %s: order_by=%s limit=%d backward=%s",
            type(store).__name__,
            query.order_by,
            limit + 1,
            query.backward,
        )
        try:
            records = await store.scan(query.where, query.order_by, limit + 1)
        except (exc.AppError, TimeoutError):
            raise
        except Exception as e:
            log.error("Storage scan failed: %s", e)
            raise exc.StorageError(detail=str(e) or type(e).__name__) from e

        items = list(records)
        has_more = len(items) > limit
        if has_more:
            del items[limit:]

        if query.backward:
            items.reverse()

        return Window[R](
            items=items,
            has_more=has_more,
            start_cursor=self._encode(items[0], sort_field) if items else None,
            end_cursor=self._encode(items[-1], sort_field) if items else None,
        )

    def _encode(self, record: Any, sort_field: str | None) -> str:
        return self._codec.encode(record, sort_field)
