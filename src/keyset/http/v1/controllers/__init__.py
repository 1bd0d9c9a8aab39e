from litestar import Controller

from .posts import PostController


def controllers() -> tuple[type[Controller], ...]:
    return (PostController,)
