"""
Epic Notes Backend: Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── sample_note_data: Field values of the demo note
    ├── database: Empty tables in a temporary SQLite file
    ├── seeded_note: The demo note and its owner, inserted into `database`
    └── test_client: HTTPX AsyncClient for endpoint testing
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before epic_notes.config is imported anywhere
_test_db_dir = tempfile.mkdtemp(prefix="epic_notes_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_db_dir}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = note
            result = await note_service.get_note_for_edit(mock_db_session, note_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note_data():
    """Field values of the note most tests edit."""
    return {
        "id": "d27a197e",
        "username": "kody",
        "title": "Basic Koala Facts",
        "content": "Koalas are found in the eucalyptus forests of eastern Australia.",
    }


@pytest_asyncio.fixture
async def database():
    """Fresh, empty tables in the temporary SQLite database."""
    from epic_notes.database import create_tables, drop_tables

    await drop_tables()
    await create_tables()
    yield
    await drop_tables()


@pytest_asyncio.fixture
async def seeded_note(database, sample_note_data):
    """Inserts the sample note and its owner; returns sample_note_data."""
    from epic_notes.database import async_session_factory
    from epic_notes.models import Note, User

    async with async_session_factory() as session:
        user = User(username=sample_note_data["username"], name="Kody")
        session.add(user)
        await session.flush()
        session.add(
            Note(
                id=sample_note_data["id"],
                title=sample_note_data["title"],
                content=sample_note_data["content"],
                owner_id=user.id,
            )
        )
        await session.commit()

    return sample_note_data


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from epic_notes.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
