from dataclasses import dataclass, is_dataclass
from typing import Any, ClassVar, dataclass_transform

from litestar import MediaType, status_codes
from litestar.openapi.datastructures import ResponseSpec
from litestar.openapi.spec import Example


@dataclass_transform()
class BaseDoc:
    message: str
    code: str | None = None
    status_code: ClassVar[int] = status_codes.HTTP_500_INTERNAL_SERVER_ERROR
    media_type: ClassVar[MediaType] = MediaType.JSON

    def __init_subclass__(cls, **kw: Any) -> None:
        if not is_dataclass(cls):
            dataclass(frozen=kw.pop("frozen", True), **kw)(cls)

    @classmethod
    def example(cls, message: str | None = None) -> dict[str, Any]:
        value: dict[str, Any] = {"message": message or cls.message}
        if cls.code:
            value["code"] = cls.code
        return value

    @classmethod
    def to_spec(
        cls,
        status_code: int | None = None,
        message: str | None = None,
        examples: list[Example] | None = None,
        media_type: MediaType | None = None,
    ) -> dict[int, ResponseSpec]:
        return {
            status_code or cls.status_code: ResponseSpec(
                cls,
                generate_examples=True,
                description=cls.message,
                media_type=media_type or cls.media_type,
                examples=[
                    Example(summary=message or cls.message, value=cls.example(message)),
                    *(examples or []),
                ],
            ),
        }


class BadRequest(BaseDoc):
    message: str = "Bad Request"
    status_code: ClassVar[int] = status_codes.HTTP_400_BAD_REQUEST


class InvalidCursor(BaseDoc):
    message: str = "Invalid cursor"
    code: str | None = "invalid_cursor"
    status_code: ClassVar[int] = status_codes.HTTP_400_BAD_REQUEST


class Timeout(BaseDoc):
    message: str = "Timeout"
    status_code: ClassVar[int] = status_codes.HTTP_408_REQUEST_TIMEOUT


class ServiceUnavailable(BaseDoc):
    message: str = "Storage failure"
    code: str | None = "storage_error"
    status_code: ClassVar[int] = status_codes.HTTP_503_SERVICE_UNAVAILABLE


class InternalServer(BaseDoc):
    message: str = "Internal Server Error"
    status_code: ClassVar[int] = status_codes.HTTP_500_INTERNAL_SERVER_ERROR
