"""
StaffRoster Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_store: AsyncMock RecordStore (no database needed)
    ├── sample_employee_data: Valid create payload
    ├── sqlite_store: SQLAlchemyRecordStore on a fresh aiosqlite file
    └── test_client: HTTPX AsyncClient against create_app(record_store=sqlite_store)
"""

import os
import tempfile

# Override settings for testing BEFORE any staffroster imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="staffroster_test_"), "test.db"
)
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["RESOURCE_PREFIX"] = "/funcionario"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from staffroster.config import Settings  # noqa: E402
from staffroster.database import (  # noqa: E402
    create_engine,
    create_session_factory,
    create_tables,
    dispose_engine,
)
from staffroster.services.record_store import RecordStore  # noqa: E402
from staffroster.services.sqlalchemy_store import SQLAlchemyRecordStore  # noqa: E402


@pytest.fixture
def mock_store():
    """
    Provides a mock record store.

    What:    AsyncMock constrained to the RecordStore interface.
    Usage:
        async def test_get(mock_store):
            mock_store.find_by_id.return_value = None
            with pytest.raises(NotFoundError): ...
    """
    return AsyncMock(spec=RecordStore)


@pytest.fixture
def sample_employee_data():
    """A create payload that passes validation."""
    return {
        "name": "Ana",
        "role": "Engineer",
        "salary": 5000,
        "terminated": False,
    }


@pytest_asyncio.fixture
async def sqlite_store(tmp_path):
    """
    Provides a real SQLAlchemyRecordStore on an isolated SQLite database.

    Each test gets its own file under tmp_path, so records never leak
    between tests. The engine is disposed after the test.
    """
    settings = Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}")
    engine = create_engine(settings)
    await create_tables(engine)
    yield SQLAlchemyRecordStore(create_session_factory(engine))
    await dispose_engine(engine)


@pytest_asyncio.fixture
async def test_client(sqlite_store):
    """
    Provides an async HTTP test client for endpoint testing.

    How:   ASGITransport routes requests directly to an app built around
           sqlite_store (the lifespan does not run, so nothing else is created).
    """
    from staffroster.main import create_app

    app = create_app(record_store=sqlite_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(mock_store):
    """HTTP test client whose store is mock_store, for failure injection."""
    from staffroster.main import create_app

    app = create_app(record_store=mock_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
