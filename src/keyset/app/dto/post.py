from __future__ import annotations

from datetime import datetime

from .base import BaseDTO


class PostPublic(BaseDTO):
    id: int
    title: str
    status: str
    created_at: datetime
    updated_at: datetime
    author: str | None = None
    score: int | None = None
