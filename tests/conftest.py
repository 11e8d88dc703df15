"""
Shared fixtures.

Tests run against a throwaway SQLite file per test (sqlite+aiosqlite), so the
real SQL statements of PasteStore are exercised. The HTTP client talks to the
app through httpx's ASGITransport; the store is connected by the fixture
because ASGITransport does not run the lifespan.
"""

import os

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# Set before any app module is imported
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("PORT", None)

from main import create_app  # noqa: E402
from models import PasteStore  # noqa: E402


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'pastes.db'}"


@pytest_asyncio.fixture
async def store(db_url):
    s = PasteStore(db_url)
    await s.connect()
    yield s
    await s.disconnect()


@pytest.fixture
def app(store):
    return create_app(store)


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def make_paste(client):
    """POST a paste and return the created row."""

    async def _make(title="A", body="B"):
        resp = await client.post("/pastes", json={"title": title, "body": body})
        assert resp.status_code == 201
        return resp.json()["data"][0]

    return _make
