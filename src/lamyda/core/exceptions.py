"""Domain error taxonomy and the HTTP handlers that render it with request_id."""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.lamyda.core.logging import get_logger

logger = get_logger(__name__)


class LamydaError(Exception):
    """Base class for domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class EntityValidationError(LamydaError):
    """A required field is missing or an input is not acceptable."""

    status_code = 422


class StorageError(LamydaError):
    """The object storage rejected or failed an upload/remove."""

    status_code = status.HTTP_502_BAD_GATEWAY


class PersistenceError(LamydaError):
    """A metadata insert, update or commit failed."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class EntityNotFoundError(LamydaError):
    """A referenced entity does not exist (or is not active) for the company."""

    status_code = status.HTTP_404_NOT_FOUND


def _error_response(status_code: int, detail: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(LamydaError)
    async def lamyda_exception_handler(request: Request, exc: LamydaError) -> JSONResponse:
        logger.info(
            "Domain error",
            error_type=type(exc).__name__,
            error=exc.message,
            path=request.url.path,
        )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=correlation_id.get(),
            path=request.url.path,
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
