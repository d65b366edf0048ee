import enum
import logging

from fastapi import Request, status
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    STORAGE = "storage"
    RENDER = "render"


STATUS_CODES = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.RENDER: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class AppError(Exception):
    """A request failure tagged with the stage that produced it."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @classmethod
    def validation(cls, message: str) -> "AppError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def storage(cls, message: str) -> "AppError":
        return cls(ErrorKind.STORAGE, message)

    @classmethod
    def render(cls, message: str) -> "AppError":
        return cls(ErrorKind.RENDER, message)


async def app_error_handler(request: Request, exc: AppError) -> PlainTextResponse:
    """Write the error message as the plain-text response body."""
    level = logging.WARNING if exc.kind is ErrorKind.VALIDATION else logging.ERROR
    logger.log(level, "%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc.message)
    return PlainTextResponse(exc.message + "\n", status_code=exc.status_code)
