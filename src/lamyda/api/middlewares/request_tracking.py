"""Count in-flight requests so shutdown can drain them.

Once draining starts, new requests are turned away with 503 so no upload
begins that the grace period might cut short.
"""

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import RequestResponseEndpoint

from src.lamyda.core.shutdown import request_tracker

UNTRACKED_PATHS = frozenset({"/health"})


async def request_tracking_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    if request.url.path in UNTRACKED_PATHS:
        return await call_next(request)

    if request_tracker.is_draining:
        return JSONResponse(
            status_code=503,
            content={"detail": "Service is shutting down"},
            headers={"Retry-After": "5"},
        )

    async with request_tracker.track_request():
        return await call_next(request)
