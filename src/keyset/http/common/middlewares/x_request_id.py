import re
from contextvars import ContextVar
from typing import Final

from litestar import types
from litestar.constants import HTTP_RESPONSE_START
from litestar.datastructures import Headers, MutableScopeHeaders
from litestar.enums import ScopeType
from litestar.middleware.base import ASGIMiddleware
from uuid_utils import uuid7


REQUEST_ID_PATTERN: Final[re.Pattern[str]] = re.compile(r"[\w.:-]{1,128}")

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def current_request_id() -> str | None:
    return request_id_var.get()


class XRequestIdMiddleware(ASGIMiddleware):
    """Echo the caller's `X-Request-Id` or issue a UUIDv7 one.

    Ids that are too long or contain anything but word characters, dots,
    colons and dashes are replaced, so they are safe to put in log lines.
    """

    header_name: Final[str] = "X-Request-Id"

    def __init__(self, scopes: tuple[ScopeType, ...] = (ScopeType.HTTP,)) -> None:
        self.scopes = scopes

    def _request_id(self, scope: types.Scope) -> str:
        incoming = Headers.from_scope(scope).get(self.header_name)
        if incoming and REQUEST_ID_PATTERN.fullmatch(incoming):
            return incoming

        return uuid7().hex

    async def handle(
        self,
        scope: types.Scope,
        receive: types.Receive,
        send: types.Send,
        next_app: types.ASGIApp,
    ) -> None:
        request_id = self._request_id(scope)
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_var.set(request_id)

        async def send_wrapper(message: types.Message) -> None:
            if message["type"] == HTTP_RESPONSE_START:
                MutableScopeHeaders.from_message(message=message)[self.header_name] = request_id

            await send(message)

        try:
            await next_app(scope, receive, send_wrapper)
        finally:
            request_id_var.reset(token)
