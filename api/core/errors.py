"""
Bookmark error taxonomy and the FastAPI handlers that render it.

Response bodies follow the public contract:
- missing field / not found: {"error": {"message": "..."}}
- rating / url format errors: plain text
- unauthorized: {"error": "Unauthorized request"}
"""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from loguru import logger

from . import config


class BookmarkError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BookmarkError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, field: str | None = None, plain_text: bool = False) -> None:
        super().__init__(message)
        self.field = field
        self.plain_text = plain_text


class NotFoundError(BookmarkError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Bookmark Not Found") -> None:
        super().__init__(message)


class UnauthorizedError(BookmarkError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message)


async def _bookmark_error_handler(_: Request, exc: BookmarkError) -> Response:
    if isinstance(exc, ValidationError) and exc.plain_text:
        return PlainTextResponse(exc.message, status_code=exc.status_code)
    if isinstance(exc, UnauthorizedError):
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)
    return JSONResponse({"error": {"message": exc.message}}, status_code=exc.status_code)


async def _unhandled_error_handler(request: Request, exc: Exception) -> Response:
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    if config.is_production():
        body: dict = {"error": {"message": "server error"}}
    else:
        body = {"message": str(exc), "error": {"type": type(exc).__name__}}
    return JSONResponse(body, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookmarkError, _bookmark_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
