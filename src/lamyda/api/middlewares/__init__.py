"""Application middlewares."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.lamyda.core.config import Settings

from .logging_context import logging_context_middleware
from .request_tracking import request_tracking_middleware

__all__ = [
    "setup_middlewares",
    "logging_context_middleware",
    "request_tracking_middleware",
]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Configure application middlewares.

    Starlette wraps each new middleware around the previous ones, so the
    last one added runs first on the request.
    """

    @app.middleware("http")
    async def _request_tracking(request, call_next):  # type: ignore[no-untyped-def]
        return await request_tracking_middleware(request, call_next)

    # Needs the correlation id, so it must sit inside CorrelationIdMiddleware
    @app.middleware("http")
    async def _logging_context(request, call_next):  # type: ignore[no-untyped-def]
        return await logging_context_middleware(request, call_next)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "X-Company-Id", "X-User-Id", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")
