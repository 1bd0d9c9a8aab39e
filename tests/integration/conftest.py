from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from typing import Final, Literal
from urllib.parse import urljoin

import pytest
from litestar import Litestar
from litestar.testing import AsyncTestClient

from config.core import ApiConfig, AppConfig, DbConfig, PaginationConfig, load_config
from keyset.http import init_app
from keyset.http.v1 import init_v1_router
from keyset.infra.database.alchemy import entity
from keyset.infra.database.alchemy.connection import ConnectionFactory
from keyset.infra.database.alchemy.store import AlchemyRecordStore


TEST_URL: Final[str] = "http://testserver.local"


@pytest.fixture(scope="function")
def db_config(tmp_path: Path) -> DbConfig:
    return DbConfig(name=str(tmp_path / "keyset.db"), create_schema=True)


@pytest.fixture(scope="function")
def app_config(db_config: DbConfig) -> AppConfig:
    return load_config(
        db=db_config,
        api=ApiConfig(debug=False, swagger=False),
        pagination=PaginationConfig(default_limit=3, max_limit=20),
    )


@pytest.fixture(scope="function")
async def connection(db_config: DbConfig) -> AsyncIterator[ConnectionFactory]:
    connection = ConnectionFactory.from_url(db_config.url())

    async with connection.engine.begin() as conn:
        await conn.run_sync(entity.Entity.metadata.create_all)

    yield connection

    await connection.dispose()


@pytest.fixture(scope="function")
def store(connection: ConnectionFactory) -> AlchemyRecordStore[entity.Post]:
    return AlchemyRecordStore(connection, entity.Post)


@pytest.fixture(scope="function")
async def app(app_config: AppConfig, connection: ConnectionFactory) -> Litestar:
    return init_app(app_config, init_v1_router())


@pytest.fixture(scope="function")
async def client(
    app: Litestar,
    app_config: AppConfig,
    anyio_backend: Literal["asyncio", "trio"],
) -> AsyncIterator[AsyncTestClient[Litestar]]:
    async with AsyncTestClient(
        app,
        base_url=urljoin(TEST_URL, app_config.api.root_path),
        backend=anyio_backend,
    ) as client:
        yield client

