import logging
from typing import Any

from litestar import Litestar
from litestar.config.app import AppConfig as LitestarConfig
from litestar.di import Provide

from config.core import AppConfig
from keyset.app.common.tools import ClosableProxy, msgspec_decoder, msgspec_encoder, singleton
from keyset.app.pagination import Paginator
from keyset.infra.database.alchemy import entity
from keyset.infra.database.alchemy.connection import ConnectionFactory
from keyset.infra.database.alchemy.store import AlchemyRecordStore


log = logging.getLogger(__name__)


async def create_schema(app: Litestar) -> None:
    async with app.state.engine.begin() as conn:
        await conn.run_sync(entity.Entity.metadata.create_all)

    log.info("Database schema is ready")


def setup_dependencies(app_config: LitestarConfig, config: AppConfig) -> None:
    engine_kw: dict[str, Any] = {}
    if not config.db.driver.startswith("sqlite"):
        engine_kw = {
            "pool_size": config.db.pool_size,
            "max_overflow": config.db.max_overflow,
            "pool_timeout": min(30, config.db.connection_timeout),
            "pool_pre_ping": config.db.ping_connection,
        }

    conn = ConnectionFactory.from_url(
        config.db.url(),
        json_serializer=msgspec_encoder,
        json_deserializer=msgspec_decoder,
        **engine_kw,
    )
    store = AlchemyRecordStore[entity.Post](conn, entity.Post)
    paginator = Paginator[entity.Post](store, config.pagination)

    app_config.dependencies["paginator"] = Provide(
        singleton(paginator),
        use_cache=True,
        sync_to_thread=False,
    )
    app_config.state.engine = ClosableProxy(conn.engine, conn.dispose)
