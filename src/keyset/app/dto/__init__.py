from . import options, post
from .base import BaseDTO, StrictBaseDTO


__all__ = (
    "BaseDTO",
    "StrictBaseDTO",
    "options",
    "post",
)
