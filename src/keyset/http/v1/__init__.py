from litestar import Router

from keyset.http.healthcheck import healthcheck_endpoint
from keyset.http.v1.controllers import controllers


def init_v1_router(*sub_routers: Router, path: str = "/v1") -> Router:
    return Router(path, route_handlers=[healthcheck_endpoint, *controllers(), *sub_routers])
