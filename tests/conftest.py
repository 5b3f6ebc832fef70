"""
Test fixtures for the Transactions Ledger API test suite.

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - client: Async HTTP test client wired to the test database
  - broken_client: Test client whose database can never be opened
  - make_transaction: Builds a valid transaction payload

In-memory SQLite (sqlite+aiosqlite://) keeps every test isolated. The
get_db dependency is overridden so the application code runs exactly as in
production, just against a different pool.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from ledger_api.database import Base, get_db
from ledger_api.main import app


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"

# The parent directory does not exist, so every connect attempt fails
UNREACHABLE_DATABASE_URL = "sqlite+aiosqlite:////nonexistent-ledger-dir/ledger.db"


def _override_for(engine):
    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    return override_get_db


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide an async session bound to the test engine."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_engine):
    """Async HTTP test client with the test database injected."""
    app.dependency_overrides[get_db] = _override_for(db_engine)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def broken_client():
    """Async HTTP test client whose database connection always fails."""
    engine = create_async_engine(UNREACHABLE_DATABASE_URL)
    app.dependency_overrides[get_db] = _override_for(engine)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
    await engine.dispose()


@pytest.fixture
def make_transaction():
    """Factory for transaction payloads; keyword arguments override fields."""

    def _make(id: str = "t1", **overrides) -> dict:
        payload = {
            "id": id,
            "datetime": "2024-01-01T00:00:00Z",
            "trx_type": "deposit",
            "trx_subtype": "cash",
            "name": "Alice",
            "amount": 1000,
        }
        payload.update(overrides)
        return payload

    return _make
