from __future__ import annotations

import multiprocessing as mp
import os
from pathlib import Path
from typing import TYPE_CHECKING, Literal
from urllib.parse import quote

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


if TYPE_CHECKING:
    import _typeshed


def root_dir() -> Path:
    return Path(__file__).resolve().parent.parent.parent


def absolute_path(
    *paths: _typeshed.StrPath | Path,
    base_path: _typeshed.StrPath | Path | None = None,
) -> str:
    if base_path is None:
        base_path = root_dir()

    return os.path.join(base_path, *paths)  # noqa: PTH118


class DbConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=absolute_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DB_",
        extra="ignore",
    )
    driver: str = "sqlite+aiosqlite"
    name: str = "keyset.db"
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    connection_timeout: int = 10
    ping_connection: bool = True
    pool_size: int = 10
    max_overflow: int = 10
    create_schema: bool = False

    def url(self) -> str:
        if self.driver.startswith("sqlite"):
            return f"{self.driver}:///{self.name}"

        return (
            f"{self.driver}://{self.user}:{quote(self.password or '')}@"
            f"{self.host}:{self.port}/{self.name}"
        )


class ServerConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=absolute_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="SERVER_",
        extra="ignore",
    )
    host: str = "127.0.0.1"
    port: int = 9393
    workers: int | Literal["auto"] = 1
    log: bool = True

    def workers_count(self) -> int:
        if self.workers == "auto":
            return max(1, mp.cpu_count() - 1)

        return self.workers


class ApiConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=absolute_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="APP_",
        extra="ignore",
    )
    root_path: str = "/api"
    title: str = "Keyset"
    debug: bool = True
    debug_detailed: bool = False
    version: str = "0.1.0"
    swagger: bool = True


class PaginationConfig(BaseSettings):
    """Page size limits, default ordering and cursor signing.

    `PAGINATION_MAX_LIMIT=50` caps every page at 50 records; larger requests are
    clamped. An empty `PAGINATION_CURSOR_SECRET` disables cursor signing.
    """

    model_config = SettingsConfigDict(
        env_file=absolute_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PAGINATION_",
        extra="ignore",
    )
    default_limit: int = Field(default=10, ge=1)
    max_limit: int = Field(default=100, ge=1)
    default_sort_field: str = "created_at"
    id_field: str = "id"
    cursor_secret: str = ""
    signature_size: int = Field(default=16, ge=1, le=32)
    sortable_fields: tuple[str, ...] = ()


class AppConfig(BaseSettings):
    api: ApiConfig
    db: DbConfig
    server: ServerConfig
    pagination: PaginationConfig


def load_config(
    db: DbConfig | None = None,
    api: ApiConfig | None = None,
    server: ServerConfig | None = None,
    pagination: PaginationConfig | None = None,
) -> AppConfig:
    return AppConfig(
        db=db or DbConfig(),
        api=api or ApiConfig(),
        server=server or ServerConfig(),
        pagination=pagination or PaginationConfig(),
    )
