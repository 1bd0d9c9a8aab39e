from .with_id import WithIDMixin
from .with_time import WithTimeMixin


__all__ = (
    "WithIDMixin",
    "WithTimeMixin",
)
