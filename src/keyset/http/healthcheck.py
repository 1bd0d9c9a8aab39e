import logging

import sqlalchemy as sa
from litestar import MediaType, get, status_codes
from litestar.datastructures import State
from sqlalchemy.exc import SQLAlchemyError

from keyset.app.contracts import exceptions as exc
from keyset.http.common import docs
from keyset.http.common.dto import HealthCheck


log = logging.getLogger(__name__)


@get(
    "/healthcheck",
    media_type=MediaType.JSON,
    tags=["healthcheck"],
    status_code=status_codes.HTTP_200_OK,
    responses=docs.ServiceUnavailable.to_spec(),
)
async def healthcheck_endpoint(state: State) -> HealthCheck:
    try:
        async with state.engine.connect() as conn:
            await conn.execute(sa.select(1))
    except SQLAlchemyError as e:
        log.error("Database is unreachable: %s", e)
        raise exc.StorageError(detail="Database is unreachable") from e

    return HealthCheck(status=True)
