from contextlib import suppress
from typing import Final

from litestar import Litestar

from config.core import AppConfig, load_config
from keyset.http import init_app
from keyset.http.v1 import init_v1_router
from keyset.infra.server import serve


config: Final[AppConfig] = load_config()
app: Final[Litestar] = init_app(config, init_v1_router())


if __name__ == "__main__":
    with suppress(KeyboardInterrupt):
        serve(config)
