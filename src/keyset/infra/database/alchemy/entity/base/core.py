import re
from typing import Any, Final

from sqlalchemy import MetaData
from sqlalchemy.ext.declarative import declared_attr
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass


PASCAL_TO_SNAKE_PATTERN: Final[re.Pattern[str]] = re.compile(r"(?<!^)(?=[A-Z])")

CONVENTION: Final[dict[str, str]] = {
    "ix": "ix_%(table_name)s_%(column_0_N_name)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}


def pascal_to_snake(obj: Any) -> str:
    return PASCAL_TO_SNAKE_PATTERN.sub("_", getattr(obj, "__name__", "")).lower()


class Entity(MappedAsDataclass, DeclarativeBase, init=False):
    metadata = MetaData(naming_convention=CONVENTION)

    @declared_attr.directive
    def __tablename__(self) -> str:
        return pascal_to_snake(self)

    @classmethod
    def column_names(cls) -> tuple[str, ...]:
        return tuple(cls.__table__.columns.keys())

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.column_names()}
