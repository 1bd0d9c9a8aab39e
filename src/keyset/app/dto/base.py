from collections.abc import Mapping
from typing import Any, Self, override

import msgspec

from keyset.app.common.tools import convert_to


class BaseDTO(msgspec.Struct):
    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> Self:
        return convert_to(cls, value, strict=False)

    @classmethod
    def from_attributes(cls, value: Any) -> Self:
        return convert_to(cls, value, strict=False, from_attributes=True)


class StrictBaseDTO(BaseDTO, forbid_unknown_fields=True):
    """Rejects unknown keys and coerces nothing; `_validate` runs on creation."""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        return

    @override
    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> Self:
        return convert_to(cls, value, strict=True)
