import os
import sys
from pathlib import Path

import pytest

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

# Test environment, applied before the application modules are imported.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Put backend/ on sys.path so the 'newsportal' package is importable without installing.
repo_root = Path(__file__).resolve().parents[2]
backend_path = repo_root / "backend"
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

from newsportal.main import app
from newsportal.database import Base
from newsportal.database import get_db as real_get_db
from newsportal.auth.service import create_access_token
from newsportal.users.models import UserRole
from newsportal.users.schema import UserCreate
from newsportal.users.service import create_user


@pytest.fixture()
async def test_engine():
    # One in-memory SQLite database per test; StaticPool keeps it on a single connection.
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db(test_engine):
    async_session = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture(autouse=True)
async def override_db(db):
    async def _get_db():
        yield db
    app.dependency_overrides[real_get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _make_user(db, name, email, password="secret123", role=UserRole.USER):
    user = await create_user(UserCreate(name=name, email=email, password=password), db, role=role)
    return user, {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture()
async def author(db):
    """A regular user and its auth headers: ``(user, headers)``."""
    return await _make_user(db, "Alice Writer", "alice@example.com")


@pytest.fixture()
async def other_user(db):
    return await _make_user(db, "Bob Reader", "bob@example.com")


@pytest.fixture()
async def admin(db):
    return await _make_user(db, "Ada Admin", "admin@example.com", role=UserRole.ADMIN)


@pytest.fixture()
def article_payload():
    return {
        "title": "Parliament passes budget",
        "content": "<p>The budget passed late on Tuesday.</p>",
        "category": "Politics",
        "tags": ["budget", "parliament"],
    }
