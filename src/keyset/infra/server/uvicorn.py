import socket
from typing import Any

import uvicorn

from config.core import AppConfig


def run_uvicorn(app: Any, config: AppConfig, **kw: Any) -> None:
    options = {
        "workers": max(1, config.server.workers_count()),
        "host": config.server.host,
        "port": config.server.port,
        "access_log": config.server.log,
        "log_level": "debug" if config.api.debug else "info",
        "backlog": max(2048, socket.SOMAXCONN),
    }
    uvicorn.run(
        app,
        **{**options, **kw},
    )
