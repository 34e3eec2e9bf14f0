"""ASGI entry point: ``uvicorn src.lamyda.main:app``."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.lamyda.api import health
from src.lamyda.api.middlewares import setup_middlewares
from src.lamyda.api.v1.router import api_router
from src.lamyda.core.config import get_settings
from src.lamyda.core.db import dispose_engine
from src.lamyda.core.exceptions import setup_exception_handlers
from src.lamyda.core.logging import get_logger, setup_logging
from src.lamyda.core.shutdown import request_tracker

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "areas", "description": "Company areas"},
    {"name": "teams", "description": "Teams and their members"},
    {"name": "processes", "description": "Documented processes and their attachments"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    settings = get_settings()
    setup_logging(settings)
    logger.info("Starting", app_name=settings.app_name, env=settings.app_env)

    yield

    # Let in-flight uploads finish before the pool goes away
    await request_tracker.start_draining()
    if not await request_tracker.wait_for_drain(timeout=settings.shutdown_grace_period):
        logger.warning(
            "Shutting down with requests in flight",
            in_flight=request_tracker.in_flight_count,
        )
    await dispose_engine()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Process documentation API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)
    app.include_router(health.router)
    app.include_router(api_router)
    return app


app = create_app()
