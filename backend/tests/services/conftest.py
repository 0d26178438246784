"""Service test fixtures — pipeline doubles and FastAPI test client.

Invariants:
    - client overrides get_db and patches db_manager so the mutation routes
      (which open their own sessions) and the list route share one database
    - view_cache cleared around each client: it is process-wide

Design Decisions:
    - Doubles implement the core Protocols structurally, no inheritance
"""

import pytest
from httpx import ASGITransport, AsyncClient

import invoice_desk.infrastructure.database as db_module
from invoice_desk.infrastructure.database import get_db
from invoice_desk.infrastructure.statement_executor import ManagedStatementExecutor
from invoice_desk.infrastructure.view_cache import view_cache
from invoice_desk.main import app
from tests.services.pipeline_doubles import (
    FailingExecutor, RecordingEffects, RecordingExecutor,
)


@pytest.fixture
def effects():
    return RecordingEffects()


@pytest.fixture
def recording_executor():
    return RecordingExecutor()


@pytest.fixture
def failing_executor():
    return FailingExecutor()


@pytest.fixture
def sqlite_executor(test_manager):
    return ManagedStatementExecutor(test_manager)


@pytest.fixture
async def client(test_session_factory, test_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Mutation routes read db_manager directly
    original_manager = db_module.db_manager
    db_module.db_manager = test_manager
    view_cache.clear()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    view_cache.clear()
