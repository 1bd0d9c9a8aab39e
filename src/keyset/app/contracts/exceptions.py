from __future__ import annotations

from typing import Any, ClassVar


class AppError(Exception):
    message: ClassVar[str] = "App exception"

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message or self.message)
        self.content: dict[str, Any] = {"message": message or self.message}
        if code:
            self.content["code"] = code

    def as_dict(self) -> dict[str, Any]:
        return {"content": self.content.copy()}

    @property
    def raw_message(self) -> str:
        return self.content.get("message", self.message) or self.message

    @property
    def raw_code(self) -> str | None:
        return self.content.get("code")

    def __repr__(self) -> str:
        content = ", ".join(f"{key}={value!r}" for key, value in self.as_dict().items())
        return f"{type(self).__name__}({content})"


class DetailedError(AppError):
    default_code: ClassVar[str | None] = None

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        **context: Any,
    ) -> None:
        super().__init__(message=message, code=code or self.default_code)
        self.content = {**self.content, **context}

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.content!r}"


class BadRequestError(DetailedError):
    message: ClassVar[str] = "Bad Request"


class ServiceUnavailableError(DetailedError):
    message: ClassVar[str] = "Service Unavailable"


class RequestTimeoutError(DetailedError):
    message: ClassVar[str] = "Request Timeout"


class InvalidCursorError(BadRequestError):
    message: ClassVar[str] = "Invalid cursor"
    default_code: ClassVar[str | None] = "invalid_cursor"


class InvalidArgumentsError(BadRequestError):
    message: ClassVar[str] = "Invalid pagination arguments"
    default_code: ClassVar[str | None] = "invalid_arguments"


class StorageError(ServiceUnavailableError):
    message: ClassVar[str] = "Storage failure"
    default_code: ClassVar[str | None] = "storage_error"


class CursorEncodeError(AppError):
    message: ClassVar[str] = "Cursor could not be encoded"
