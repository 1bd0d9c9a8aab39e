from __future__ import annotations

from typing import Any

import sqlalchemy as sa
from sqlalchemy import orm

from .base import Entity, mixins


class Post(mixins.WithIDMixin, mixins.WithTimeMixin, Entity):
    title: orm.Mapped[str] = orm.mapped_column(sa.String(255))
    status: orm.Mapped[str] = orm.mapped_column(sa.String(32), default="draft", index=True)
    author: orm.Mapped[str | None] = orm.mapped_column(sa.String(255), default=None)
    score: orm.Mapped[int | None] = orm.mapped_column(default=None)

    @orm.declared_attr.directive
    def __table_args__(self) -> Any:
        return (
            sa.Index(None, self.created_at, self.id),
            sa.Index(None, self.score, self.id),
        )
