from litestar.types.composite_types import Middleware

from .x_request_id import XRequestIdMiddleware, current_request_id


__all__ = (
    "XRequestIdMiddleware",
    "current_request_id",
    "middlewares",
)


def middlewares() -> tuple[Middleware, ...]:
    return (XRequestIdMiddleware(),)
