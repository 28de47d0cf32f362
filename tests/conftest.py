import os

# Read by app.core.config at import time
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core import storage
from app.core.database import Base, get_db
from app.main import app
from app.models.skill import Category, Skill

# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite://"

CATALOG = {
    "Art": ["Drawing", "Painting"],
    "Music": ["Guitar", "Piano"],
    "Technology": ["Python"],
}


@pytest.fixture
async def engine():
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_maker):
    """A session for arranging and inspecting data outside requests."""
    async with session_maker() as session:
        yield session


@pytest.fixture
async def catalog(session_maker):
    async with session_maker() as session:
        for category_name, skill_names in CATALOG.items():
            session.add(Category(
                name=category_name,
                skills=[Skill(name=name) for name in skill_names],
            ))
        await session.commit()


@pytest.fixture
def uploads(monkeypatch):
    """Record object store calls instead of talking to S3."""
    calls = {"uploaded": [], "deleted": []}

    async def fake_upload(key, data, content_type=None):
        calls["uploaded"].append((key, data, content_type))

    async def fake_delete(key):
        calls["deleted"].append(key)

    monkeypatch.setattr(storage, "upload_bytes", fake_upload)
    monkeypatch.setattr(storage, "delete_object", fake_delete)
    return calls


@pytest.fixture
async def client(session_maker, catalog):
    # Dependency override
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


async def register(client, username, email=None, password="secret123"):
    response = await client.post("/api/register", json={
        "username": username,
        "email": email or f"{username}@x.com",
        "password": password,
    })
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def signup(client):
    """Register a user and return Authorization headers for them."""
    async def _signup(username, **kwargs):
        body = await register(client, username, **kwargs)
        return {"Authorization": f"Bearer {body['accessToken']}"}
    return _signup


@pytest.fixture
def miss_once(monkeypatch):
    """
    Make a repository lookup report "not found" on its first call only.

    Lets a request slip past a service's pre-check so the storage constraint
    is what rejects it. Later calls hit the database as usual.
    """
    def _miss_once(cls, name, miss_value=None):
        original = getattr(cls, name)
        calls = []

        async def patched(self, *args, **kwargs):
            calls.append(args)
            if len(calls) == 1:
                return miss_value
            return await original(self, *args, **kwargs)

        monkeypatch.setattr(cls, name, patched)
        return calls
    return _miss_once
