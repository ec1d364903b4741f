"""Map service exceptions to plain-text HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortener.errors import (
    InvalidURLError,
    KeyAllocationError,
    KeyNotFoundError,
    StoreError,
)
from shortener.common.logging_config import get_logger

logger = get_logger("web")


async def _invalid_request(request: Request, exc: Exception) -> PlainTextResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return PlainTextResponse("invalid request", status_code=status.HTTP_400_BAD_REQUEST)


async def _key_not_found(request: Request, exc: KeyNotFoundError) -> PlainTextResponse:
    return PlainTextResponse("key not found", status_code=status.HTTP_404_NOT_FOUND)


async def _database_error(request: Request, exc: Exception) -> PlainTextResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return PlainTextResponse("database error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def _http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on app."""
    app.add_exception_handler(RequestValidationError, _invalid_request)
    app.add_exception_handler(InvalidURLError, _invalid_request)
    app.add_exception_handler(KeyNotFoundError, _key_not_found)
    app.add_exception_handler(StoreError, _database_error)
    app.add_exception_handler(KeyAllocationError, _database_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
