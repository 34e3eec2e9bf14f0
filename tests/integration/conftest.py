"""Integration test fixtures for database and HTTP client operations.

These fixtures require a PostgreSQL database at TEST_DATABASE_URL; the
root conftest skips integration tests when it is not set. Object storage
is always the in-memory fake.
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from src.lamyda.api.dependencies import get_object_storage
from src.lamyda.core import db
from src.lamyda.core.config import get_settings
from src.lamyda.core.db import run_migrations_sync
from src.lamyda.main import create_app
from src.lamyda.models import Company
from tests.factories import CompanyFactory
from tests.fakes import FakeObjectStorage
from tests.utils.cleanup import cleanup_company_cascade


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create test database engine and ensure migrations are applied."""
    await db.dispose_engine()

    settings = get_settings()
    test_engine = create_async_engine(settings.database_url, poolclass=NullPool)

    await asyncio.to_thread(run_migrations_sync)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session is not committed on exit; tests commit explicitly.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


async def _create_company(
    engine: AsyncEngine, db_session: AsyncSession, **kwargs
) -> AsyncGenerator[Company]:
    company = CompanyFactory.build(**kwargs)
    db_session.add(company)
    await db_session.commit()

    yield company

    async with engine.connect() as conn:
        await cleanup_company_cascade(conn, company.id)
        await conn.commit()


@pytest.fixture
async def test_company(engine: AsyncEngine, db_session: AsyncSession) -> AsyncGenerator[Company]:
    """An active company, removed with everything it owns afterwards."""
    async for company in _create_company(engine, db_session):
        yield company


@pytest.fixture
async def other_company(engine: AsyncEngine, db_session: AsyncSession) -> AsyncGenerator[Company]:
    """A second active company for isolation checks."""
    async for company in _create_company(engine, db_session):
        yield company


@pytest.fixture
def object_storage() -> FakeObjectStorage:
    return FakeObjectStorage()


@pytest.fixture
async def client(
    engine: AsyncEngine, test_company: Company, user_id, object_storage: FakeObjectStorage
) -> AsyncGenerator[AsyncClient]:
    """HTTP client acting as ``user_id`` on behalf of ``test_company``."""
    await db.dispose_engine()

    app = create_app()
    app.dependency_overrides[get_object_storage] = lambda: object_storage
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Company-Id": str(test_company.id), "X-User-Id": str(user_id)},
    ) as client:
        yield client

    await db.dispose_engine()
