"""Per-request log context and a completion line for every request."""

import time

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.lamyda.core.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger("lamyda.access")

QUIET_PATHS = frozenset({"/health"})


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    clear_request_context()
    bind_request_context(correlation_id.get(), request.method, request.url.path)
    started = time.perf_counter()
    try:
        response = await call_next(request)
        if request.url.path not in QUIET_PATHS:
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
        return response
    finally:
        clear_request_context()
