"""
Test configuration and fixtures.

Provides:
- A fresh in-memory SQLite schema per test
- Local file storage under tmp_path
- HTTPX AsyncClient bound to the app with get_db overridden
"""
import os
from typing import AsyncGenerator, Generator

# Must be set before any esms module reads settings.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TESTING"] = "1"
os.environ["ENV"] = "test"
os.environ["STORAGE_BACKEND"] = "local"
os.environ["PUBLIC_FILE_BASE_URL"] = "/api/files"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from esms.core.config import settings
from esms.core.deps import get_db
from esms.db.base import Base
from esms.db.session import SessionLocal, engine
from esms.main import app


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Session on a freshly created schema.

    The engine is in-memory with a single shared connection, so the app
    and the test see the same data. Tables are dropped afterwards.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def storage_root(tmp_path, monkeypatch) -> str:
    """Local storage backend rooted in the test's tmp_path."""
    root = tmp_path / "files"
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "local")
    monkeypatch.setattr(settings, "LOCAL_STORAGE_PATH", str(root))
    return str(root)


# =============================================================================
# HTTP Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient against the app, sharing the test session."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()

