"""Root conftest — async DB, document store and FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file (tmp_path), tables created
      from Base.metadata
    - get_document_store dependency overridden to use the test database
    - DATABASE_URL points at SQLite so importing the app never needs Postgres

Design Decisions:
    - File database instead of :memory:: every session gets its own connection,
      so concurrent transactions behave like they do against a real server
    - db_manager patched: readiness and anything using the module-level manager
      see the test engine
"""

import os

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from httpx import ASGITransport, AsyncClient

from quizhub.db.session import create_session_factory
from quizhub.infrastructure.database import DatabaseSessionManager
from quizhub.infrastructure.document_store import SqlDocumentStore, get_document_store
import quizhub.infrastructure.database as db_module
from quizhub.main import app


@pytest.fixture
async def db_manager(tmp_path):
    engine, session_factory = create_session_factory(
        f"sqlite+aiosqlite:///{tmp_path / 'quizhub-test.db'}",
        # Writers queue on the database lock; give waiters room
        connect_args={"timeout": 30},
    )
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = engine
    manager._session_factory = session_factory
    await manager.create_tables()
    yield manager
    await engine.dispose()


@pytest.fixture
def test_session_factory(db_manager) -> async_sessionmaker[AsyncSession]:
    return db_manager._session_factory


@pytest.fixture
def store(db_manager) -> SqlDocumentStore:
    return SqlDocumentStore(db_manager.session)


@pytest.fixture
async def client(db_manager, store):
    """FastAPI test client with the document store dependency overridden."""
    app.dependency_overrides[get_document_store] = lambda: store

    original_manager = db_module.db_manager
    db_module.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_user(client):
    """Create a user through the API."""
    res = await client.post("/users", json={"name": "Bob Builder"})
    assert res.status_code == 200
    return res.json()


@pytest.fixture
async def seed_quiz(client):
    """Create a quiz through the API."""
    res = await client.post(
        "/quizzes",
        json={"name": "Quiz 2", "description": "this is a quiz to do something"},
    )
    assert res.status_code == 200
    return res.json()
