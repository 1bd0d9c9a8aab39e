from .base import Entity
from .post import Post


__all__ = (
    "Entity",
    "Post",
)
