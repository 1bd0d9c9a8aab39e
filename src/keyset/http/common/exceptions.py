import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from litestar import MediaType, Request, Response
from litestar import status_codes as status
from litestar.types import ExceptionHandlersMap

import keyset.app.contracts.exceptions as app_exc
from keyset.http.common.middlewares import current_request_id


log = logging.getLogger(__name__)

JsonResponse = Response[dict[str, Any]]
BasicRequest = Request[Any, Any, Any]


def exc_handlers() -> ExceptionHandlersMap:
    return {
        app_exc.BadRequestError: error_handler(status.HTTP_400_BAD_REQUEST),
        app_exc.InvalidCursorError: error_handler(status.HTTP_400_BAD_REQUEST),
        app_exc.InvalidArgumentsError: error_handler(status.HTTP_400_BAD_REQUEST),
        app_exc.RequestTimeoutError: error_handler(status.HTTP_408_REQUEST_TIMEOUT),
        app_exc.ServiceUnavailableError: error_handler(status.HTTP_503_SERVICE_UNAVAILABLE),
        app_exc.StorageError: error_handler(status.HTTP_503_SERVICE_UNAVAILABLE),
        app_exc.AppError: error_handler(status.HTTP_500_INTERNAL_SERVER_ERROR),
        TimeoutError: timeout_handler,
    }


def error_handler(
    status_code: int,
) -> Callable[..., JsonResponse]:
    return partial(app_error_handler, status_code=status_code)


def app_error_handler(
    request: BasicRequest,
    exc: app_exc.AppError,
    status_code: int,
) -> JsonResponse:
    return handle_error(
        request,
        exc=exc,
        status_code=status_code,
    )


def timeout_handler(request: BasicRequest, exc: TimeoutError) -> JsonResponse:
    return handle_error(
        request,
        exc=app_exc.RequestTimeoutError(detail=str(exc) or "Storage did not answer in time"),
        status_code=status.HTTP_408_REQUEST_TIMEOUT,
    )


def handle_error(
    _: BasicRequest,
    exc: app_exc.AppError,
    status_code: int,
) -> JsonResponse:
    log.error(
        "Handle error [%s]: %s -> %s", current_request_id(), type(exc).__name__, exc.content
    )

    return JsonResponse(
        **exc.as_dict(),
        status_code=status_code,
        media_type=MediaType.JSON,
    )
