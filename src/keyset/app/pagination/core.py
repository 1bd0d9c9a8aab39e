from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import msgspec

from config.core import PaginationConfig
from keyset.app.contracts import exceptions as exc
from keyset.app.contracts.pagination import (
    Connection,
    CursorPage,
    FieldPageMeta,
    PageInfo,
    PageMeta,
)
from keyset.app.contracts.predicate import from_filters
from keyset.app.contracts.storage import RecordStore
from keyset.app.dto.base import StrictBaseDTO
from keyset.app.dto.options import ConnectionOptions, FieldPageOptions, IdPageOptions

from .assembler import PageAssembler
from .builder import KeysetQueryBuilder
from .codec import CursorCodec


log = logging.getLogger(__name__)


class Paginator[R]:
    """Cursor pagination over a single :class:`RecordStore`.

    Three access patterns share one keyset engine:

    * :meth:`paginate_by_id` walks by identity only;
    * :meth:`paginate_by_field` walks by a sort field, identity breaking ties;
    * :meth:`bidirectional_paginate` follows the connection convention
      (``first``/``after`` forward, ``last``/``before`` backward).

    Every argument is validated before the store is touched. The paginator
    keeps no state between calls; the position lives in the cursor token.
    """

    __slots__ = (
        "_assembler",
        "_builder",
        "_codec",
        "_config",
        "_store",
    )

    def __init__(
        self,
        store: RecordStore[R],
        config: PaginationConfig | None = None,
        codec: CursorCodec | None = None,
    ) -> None:
        self._store = store
        self._config = config or PaginationConfig()
        self._codec = codec or CursorCodec.from_config(self._config)
        self._builder = KeysetQueryBuilder(self._codec.id_field)
        self._assembler = PageAssembler(self._codec)

    @property
    def codec(self) -> CursorCodec:
        return self._codec

    @property
    def config(self) -> PaginationConfig:
        return self._config

    async def paginate_by_id(
        self,
        options: IdPageOptions | None = None,
        /,
        **kw: Any,
    ) -> CursorPage[R, PageMeta]:
        opts = _make_options(IdPageOptions, options, kw)
        limit = self._limit(opts.limit)
        query = self._builder.build(
            order=opts.order,
            cursor=self._codec.decode_optional(opts.cursor),
            where=from_filters(opts.filter),
        )

        window = await self._assembler.assemble(self._store, query, limit)

        return CursorPage[R, PageMeta](
            data=window.items,
            pagination=PageMeta(
                has_more=window.has_more,
                next_cursor=window.end_cursor if window.has_more else None,
                limit=limit,
                count=len(window.items),
            ),
        )

    async def paginate_by_field(
        self,
        options: FieldPageOptions | None = None,
        /,
        **kw: Any,
    ) -> CursorPage[R, FieldPageMeta]:
        opts = _make_options(FieldPageOptions, options, kw)
        limit = self._limit(opts.limit)
        sort_field = self._sort_field(opts.sort_field)
        query = self._builder.build(
            order=opts.order,
            cursor=self._codec.decode_optional(opts.cursor),
            sort_field=sort_field,
            where=from_filters(opts.filter),
        )

        window = await self._assembler.assemble(
            self._store, query, limit, sort_field=sort_field
        )

        return CursorPage[R, FieldPageMeta](
            data=window.items,
            pagination=FieldPageMeta(
                has_more=window.has_more,
                next_cursor=window.end_cursor if window.has_more else None,
                limit=limit,
                count=len(window.items),
                sort_field=sort_field,
                order=opts.order,
            ),
        )

    async def bidirectional_paginate(
        self,
        options: ConnectionOptions | None = None,
        /,
        **kw: Any,
    ) -> Connection[R]:
        opts = _make_options(ConnectionOptions, options, kw)
        limit = self._limit(opts.size)
        sort_field = self._sort_field(opts.sort_field)
        query = self._builder.build(
            order=opts.order,
            cursor=self._codec.decode_optional(opts.cursor),
            sort_field=sort_field,
            where=from_filters(opts.filter),
            backward=not opts.is_forward,
        )

        window = await self._assembler.assemble(
            self._store, query, limit, sort_field=sort_field
        )

        if opts.is_forward:
            has_next_page, has_previous_page = window.has_more, opts.after is not None
        else:
            has_next_page, has_previous_page = opts.before is not None, window.has_more

        return Connection[R](
            data=window.items,
            page_info=PageInfo(
                has_next_page=has_next_page,
                has_previous_page=has_previous_page,
                start_cursor=window.start_cursor,
                end_cursor=window.end_cursor,
            ),
        )

    def _limit(self, requested: int | None) -> int:
        max_limit = self._config.max_limit
        if requested is None:
            return min(self._config.default_limit, max_limit)

        if requested > max_limit:
            log.debug("Clamping page size %d to %d", requested, max_limit)
            return max_limit

        return requested

    def _sort_field(self, requested: str | None) -> str:
        sort_field = requested or self._config.default_sort_field
        allowed = self._config.sortable_fields
        if allowed and sort_field not in allowed and sort_field != self._codec.id_field:
            raise exc.InvalidArgumentsError(
                f"Sorting by `{sort_field}` is not allowed",
                argument="sort_field",
                allowed=sorted(allowed),
            )

        return sort_field


def _make_options[O: StrictBaseDTO](
    cls: type[O],
    options: O | None,
    kw: Mapping[str, Any],
) -> O:
    if options is None:
        try:
            return cls.from_mapping(kw)
        except msgspec.ValidationError as e:
            raise exc.InvalidArgumentsError(str(e)) from e

    if kw:
        raise exc.InvalidArgumentsError(
            "Pass either an options object or keyword arguments, not both",
            unexpected=sorted(kw),
        )
    if not isinstance(options, cls):
        raise exc.InvalidArgumentsError(
            f"Expected {cls.__name__}, got {type(options).__name__}",
        )

    return options
