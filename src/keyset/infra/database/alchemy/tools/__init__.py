from .common import get_column, to_clause, to_order_by


__all__ = (
    "get_column",
    "to_clause",
    "to_order_by",
)
