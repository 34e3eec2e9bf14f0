"""Process-wide async engine."""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.lamyda.core.config import Settings, get_settings

_engine: AsyncEngine | None = None


def build_engine(settings: Settings) -> AsyncEngine:
    """Engine over asyncpg, tagged with the app name in pg_stat_activity."""
    return create_async_engine(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_recycle=settings.database_pool_recycle,
        pool_pre_ping=True,
        connect_args={"server_settings": {"application_name": settings.database_application_name}},
    )


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = build_engine(get_settings())
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections. Safe to call when no engine was created."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
