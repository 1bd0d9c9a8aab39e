from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from litestar import Litestar, Router
from litestar.config.app import AppConfig as LitestarConfig
from litestar.middleware.logging import LoggingMiddlewareConfig
from litestar.openapi.config import OpenAPIConfig
from litestar.openapi.plugins import ScalarRenderPlugin, SwaggerRenderPlugin

from config.core import AppConfig
from keyset.app.common.tools import ClosableProxy
from keyset.http.common.exceptions import exc_handlers
from keyset.http.common.middlewares import middlewares

from .dependencies import create_schema, setup_dependencies


@asynccontextmanager
async def lifespan(app: Litestar) -> AsyncIterator[None]:
    try:
        yield
    finally:
        for v in app.state.values():
            if isinstance(v, ClosableProxy):
                await v.close()


def _on_app_init(config: AppConfig, *routers: Router) -> Callable[[LitestarConfig], LitestarConfig]:
    def _wrapped(app_config: LitestarConfig) -> LitestarConfig:
        app_config.exception_handlers.update(exc_handlers())
        app_config.middleware.extend(middlewares())
        app_config.route_handlers.extend(routers)
        setup_dependencies(app_config, config)

        if config.api.debug and config.api.debug_detailed:
            app_config.middleware.append(LoggingMiddlewareConfig().middleware)

        return app_config

    return _wrapped


def init_app(config: AppConfig, *routers: Router) -> Litestar:
    app = Litestar(
        path=config.api.root_path,
        openapi_config=(
            OpenAPIConfig(
                title=config.api.title,
                version=config.api.version,
                render_plugins=(SwaggerRenderPlugin(), ScalarRenderPlugin()),
            )
        )
        if config.api.title and config.api.swagger
        else None,
        debug=config.api.debug,
        lifespan=[lifespan],
        on_app_init=[_on_app_init(config, *routers)],
    )

    if config.db.create_schema:
        app.on_startup.append(create_schema)

    return app
