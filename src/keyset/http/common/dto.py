from dataclasses import dataclass
from typing import Annotated

from litestar.params import Parameter

from keyset.app.contracts.pagination import SortOrder
from keyset.app.dto import BaseDTO
from keyset.app.dto.options import ConnectionOptions, FieldPageOptions, IdPageOptions


@dataclass(slots=True, frozen=True)
class HealthCheck:
    status: bool


class CursorQuery(BaseDTO):
    cursor: Annotated[str | None, Parameter(description="Opaque `cursor` from a previous page")] = None
    limit: Annotated[int | None, Parameter(ge=1, description="Items `limit`")] = None
    order: Annotated[SortOrder, Parameter(description="`sorting` direction")] = "DESC"

    def to_options(self, filter: object = None) -> IdPageOptions:  # noqa: A002
        return IdPageOptions(cursor=self.cursor, limit=self.limit, order=self.order, filter=filter)


class FieldCursorQuery(CursorQuery):
    sort_field: Annotated[str | None, Parameter(description="Field to sort by")] = None

    def to_options(self, filter: object = None) -> FieldPageOptions:  # noqa: A002
        return FieldPageOptions(
            cursor=self.cursor,
            limit=self.limit,
            order=self.order,
            sort_field=self.sort_field,
            filter=filter,
        )


class ConnectionQuery(BaseDTO):
    first: Annotated[int | None, Parameter(ge=1, description="Items after `after`")] = None
    after: Annotated[str | None, Parameter(description="Forward `cursor`")] = None
    last: Annotated[int | None, Parameter(ge=1, description="Items before `before`")] = None
    before: Annotated[str | None, Parameter(description="Backward `cursor`")] = None
    sort_field: Annotated[str | None, Parameter(description="Field to sort by")] = None
    order: Annotated[SortOrder, Parameter(description="`sorting` direction")] = "DESC"

    def to_options(self, filter: object = None) -> ConnectionOptions:  # noqa: A002
        return ConnectionOptions(
            first=self.first,
            after=self.after,
            last=self.last,
            before=self.before,
            sort_field=self.sort_field,
            order=self.order,
            filter=filter,
        )
