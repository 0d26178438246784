"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Nothing here talks to a real PostgreSQL server

Design Decisions:
    - SQLite in-memory through aiosqlite: fast, no external dependency; the invoice
      statements use no PostgreSQL-specific features
    - Reads in assertions go through a fresh session so they see committed rows
"""

import os

# Ensure tests never point at a real database
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

import pytest  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from invoice_desk.db.base import Base  # noqa: E402
from invoice_desk.infrastructure.database import DatabaseSessionManager  # noqa: E402
from invoice_desk.models.invoice import Invoice  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def test_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the in-memory engine (no pool kwargs)."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def fetch_invoices(test_session_factory):
    """Callable returning every stored invoice row."""
    async def _fetch() -> list[Invoice]:
        async with test_session_factory() as session:
            result = await session.execute(select(Invoice))
            return list(result.scalars().all())
    return _fetch
