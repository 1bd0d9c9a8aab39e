from .assembler import PageAssembler
from .builder import KeysetQueryBuilder
from .codec import CursorCodec
from .core import Paginator


__all__ = (
    "CursorCodec",
    "KeysetQueryBuilder",
    "PageAssembler",
    "Paginator",
)
