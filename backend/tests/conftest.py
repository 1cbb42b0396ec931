"""
Animal Catalog Backend — Test Configuration (conftest.py)
===========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── temp_storage: Temporary directory for file operations
    ├── sample_image_bytes: Fake image content for upload tests
    ├── db_engine / database: In-memory SQLite with the schema created
    └── test_client: HTTPX AsyncClient bound to a fresh app + database
"""

import os
import shutil
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
TEST_UPLOAD_ROOT = tempfile.mkdtemp(prefix="animal_catalog_test_")
os.environ["UPLOAD_ROOT"] = TEST_UPLOAD_ROOT
os.environ["ENVIRONMENT"] = "development"
os.environ["CORS_ORIGINS_DEVELOPMENT"] = "http://localhost:3000"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from animal_catalog.database import Base, Database
from animal_catalog.models import Category


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture(scope="session", autouse=True)
def upload_root():
    """The UPLOAD_ROOT the app writes to; removed once the session ends."""
    yield TEST_UPLOAD_ROOT
    shutil.rmtree(TEST_UPLOAD_ROOT, ignore_errors=True)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_missing(mock_db_session):
            mock_db_session.get.return_value = None
            with pytest.raises(NotFoundError):
                await category_service.update_category(mock_db_session, update)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "uploads"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def sample_image_bytes():
    """Minimal JPEG: SOI + JFIF header + EOI."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_category():
    """A persisted-looking Category instance (not attached to any session)."""
    now = datetime.now(timezone.utc)
    return Category(id=uuid4(), name="Reptiles", created_at=now, updated_at=now)


# ══════════════════════════════════════════════════════════════════════════
# API fixtures (real SQLite database, real routing)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite shared by every connection of the test (StaticPool),
    with all tables created.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def database(db_engine):
    return Database(db_engine)


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    ASGITransport does not run the lifespan, so the test database is
    attached to app.state directly.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/animals")
            assert response.status_code == 200
    """
    from animal_catalog.main import create_app

    app = create_app()
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def create_category(test_client):
    """Factory: POST a category and return its JSON body."""

    async def _create(name: str = "Reptiles") -> dict:
        response = await test_client.post("/api/category", json={"name": name})
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest_asyncio.fixture
async def create_animal(test_client, sample_image_bytes):
    """Factory: POST a multipart animal and return the response."""

    async def _create(category_id: str, name: str = "Iguana", filename: str = "iguana.jpg"):
        return await test_client.post(
            f"/api/animal/category/{category_id}",
            data={"name": name},
            files={"image": (filename, sample_image_bytes, "image/jpeg")},
        )

    return _create
