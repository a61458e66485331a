import os
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from plexrbac.db.session import Base, get_db
from plexrbac.main import app
from plexrbac.tracing import NativeCapturer, configure_trace_capture, get_trace_capturer

# Fixtures from other modules (tests/seeds.py) must be registered through pytest_plugins.
pytest_plugins = ["tests.seeds"]

# Point TEST_DATABASE_URL at a Postgres database to run against the production dialect.
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL", "sqlite+aiosqlite:///./plexrbac_test.db"
)

engine = create_async_engine(TEST_DATABASE_URL, poolclass=NullPool)
async_session = async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture(autouse=True)
def native_trace_capture() -> Iterator[None]:
    """Every test starts with the native capturer and gets the previous one back after."""
    previous = get_trace_capturer()
    configure_trace_capture(NativeCapturer())
    yield
    configure_trace_capture(previous)


@pytest_asyncio.fixture
async def db() -> AsyncIterator[AsyncSession]:
    """Create tables and yield a session, then drop tables after test."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncIterator[AsyncClient]:
    """HTTP client that uses the test database session."""

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
