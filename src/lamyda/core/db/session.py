"""Database session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.lamyda.core.db.engine import get_engine


@asynccontextmanager
async def get_session(engine: AsyncEngine | None = None) -> AsyncGenerator[AsyncSession]:
    """Create a database session.

    Args:
        engine: Optional engine override for testing.

    Yields:
        AsyncSession. Commits are issued by the service layer; anything left
        uncommitted when the block exits is rolled back.
    """
    if engine is None:
        engine = get_engine()

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()
