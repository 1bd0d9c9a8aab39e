from litestar import Controller, MediaType, get, status_codes
from litestar.di import Provide

from keyset.app import dto
from keyset.app.contracts.pagination import Connection, CursorPage, FieldPageMeta, PageMeta
from keyset.app.contracts.predicate import ref
from keyset.app.pagination import Paginator
from keyset.http.common import docs
from keyset.http.common.dto import ConnectionQuery, CursorQuery, FieldCursorQuery
from keyset.infra.database.alchemy import entity


PUBLISHED = "published"


class PostController(Controller):
    path = "/posts"
    tags = ["posts"]

    @get(
        media_type=MediaType.JSON,
        status_code=status_codes.HTTP_200_OK,
        responses=docs.InvalidCursor.to_spec()
        | docs.ServiceUnavailable.to_spec()
        | docs.Timeout.to_spec()
        | docs.InternalServer.to_spec(),
        dependencies={"pagination": Provide(CursorQuery, sync_to_thread=False)},
    )
    async def get_posts_endpoint(
        self,
        pagination: CursorQuery,
        paginator: Paginator[entity.Post],
    ) -> CursorPage[dto.post.PostPublic, PageMeta]:
        page = await paginator.paginate_by_id(pagination.to_options({"status": PUBLISHED}))

        return page.map(dto.post.PostPublic.from_attributes)

    @get(
        "/advanced",
        media_type=MediaType.JSON,
        status_code=status_codes.HTTP_200_OK,
        responses=docs.InvalidCursor.to_spec()
        | docs.ServiceUnavailable.to_spec()
        | docs.Timeout.to_spec()
        | docs.InternalServer.to_spec(),
        dependencies={"pagination": Provide(FieldCursorQuery, sync_to_thread=False)},
    )
    async def get_posts_by_field_endpoint(
        self,
        pagination: FieldCursorQuery,
        paginator: Paginator[entity.Post],
    ) -> CursorPage[dto.post.PostPublic, FieldPageMeta]:
        # drafts and anonymous posts are never listed here
        where = ref("status").eq(PUBLISHED) & ref("author").is_not_null()
        page = await paginator.paginate_by_field(pagination.to_options(where))

        return page.map(dto.post.PostPublic.from_attributes)

    @get(
        "/bidirectional",
        media_type=MediaType.JSON,
        status_code=status_codes.HTTP_200_OK,
        responses=docs.InvalidCursor.to_spec()
        | docs.BadRequest.to_spec()
        | docs.ServiceUnavailable.to_spec()
        | docs.Timeout.to_spec()
        | docs.InternalServer.to_spec(),
        dependencies={"pagination": Provide(ConnectionQuery, sync_to_thread=False)},
    )
    async def get_posts_connection_endpoint(
        self,
        pagination: ConnectionQuery,
        paginator: Paginator[entity.Post],
    ) -> Connection[dto.post.PostPublic]:
        connection = await paginator.bidirectional_paginate(
            pagination.to_options({"status": PUBLISHED})
        )

        return connection.map(dto.post.PostPublic.from_attributes)
