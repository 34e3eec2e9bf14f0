"""Liveness and readiness probe."""

import asyncio

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.lamyda.core.config import get_settings
from src.lamyda.core.db import get_session
from src.lamyda.core.logging import get_logger
from src.lamyda.core.shutdown import request_tracker

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


async def probe_database(timeout: float) -> str:
    """``"healthy"`` or ``"unhealthy: <reason>"``."""
    try:
        async with asyncio.timeout(timeout):
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
    except TimeoutError:
        return f"unhealthy: no answer within {timeout}s"
    except Exception as e:
        logger.warning("Database probe failed", error=str(e))
        return f"unhealthy: {e}"
    return "healthy"


@router.get("/health", include_in_schema=False)
async def health() -> JSONResponse:
    """503 while draining or when the database does not answer."""
    if request_tracker.is_draining:
        return JSONResponse(
            status_code=503,
            content={"status": "draining", "in_flight_requests": request_tracker.in_flight_count},
        )

    database = await probe_database(get_settings().health_check_timeout)
    healthy = database == "healthy"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "healthy" if healthy else "unhealthy", "database": database},
    )
