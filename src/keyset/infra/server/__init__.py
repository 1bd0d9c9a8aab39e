from typing import Any

from config.core import AppConfig

from .uvicorn import run_uvicorn


def serve(config: AppConfig, suffix: str = "app", **kw: Any) -> None:
    run_uvicorn(f"keyset.__main__:{suffix}", config, **kw)
