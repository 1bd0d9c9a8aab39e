from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine


class ConnectionFactory:
    """Hands out sessions bound to one engine; calling the factory opens a session."""

    __slots__ = ("_engine", "_sessionmaker")

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._sessionmaker = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)

    @classmethod
    def from_url(cls, url: str, **options: Any) -> ConnectionFactory:
        return cls(create_async_engine(url, **options))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    def create_connection(self) -> AsyncSession:
        return self._sessionmaker()

    __call__ = create_connection

    async def dispose(self) -> None:
        await self._engine.dispose()
