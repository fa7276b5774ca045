"""API test fixtures — FastAPI app on a temporary SQLite store.

Invariants:
    - get_db_manager overridden to the per-test database
    - Store singleton and per-user feed controllers reset around every test
    - database.db_manager patched for the readiness probe
"""

import pytest
from httpx import ASGITransport, AsyncClient

import applixy.api.dependencies as deps
import applixy.infrastructure.database as db_module
from applixy.infrastructure.database import get_db_manager
from applixy.main import app


@pytest.fixture
async def client(db_manager, monkeypatch):
    app.dependency_overrides[get_db_manager] = lambda: db_manager
    monkeypatch.setattr(db_module, "db_manager", db_manager)
    monkeypatch.setattr(deps, "_store", None)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    await deps.close_feed_controllers()
    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(client):
    res = await client.post("/api/v1/auth/anonymous")
    return {"Authorization": f"Bearer {res.json()['access_token']}"}
