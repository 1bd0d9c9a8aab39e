from datetime import UTC, datetime

import sqlalchemy as sa
from sqlalchemy import orm


def _utcnow() -> datetime:
    return datetime.now(UTC)


class WithTimeMixin(orm.MappedAsDataclass):
    created_at: orm.Mapped[datetime] = orm.mapped_column(
        sa.DateTime(timezone=True),
        default_factory=_utcnow,
        kw_only=True,
    )
    updated_at: orm.Mapped[datetime] = orm.mapped_column(
        sa.DateTime(timezone=True),
        default_factory=_utcnow,
        onupdate=_utcnow,
        kw_only=True,
    )
