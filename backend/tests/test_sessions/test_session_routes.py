"""Integration tests for session route handlers.

Tests the full HTTP stack using HTTPX AsyncClient with the FastAPI app
and mongomock-motor (no real MongoDB required).
"""

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from potsettle.dal import database as db_module
from potsettle.routes import sessions as sessions_route_module


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def route_db(mock_db):
    """Patch every get_database reference to return the mock database."""
    getter = lambda: mock_db
    orig_db = db_module.get_database
    orig_routes = sessions_route_module.get_database

    db_module.get_database = getter
    sessions_route_module.get_database = getter

    yield mock_db

    db_module.get_database = orig_db
    sessions_route_module.get_database = orig_routes


@pytest_asyncio.fixture
async def test_client(route_db):
    """Async HTTP client wired to the FastAPI app with mocked db."""
    from potsettle.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


PLAYERS = [
    {"name": "Alice", "buy_in": "20", "cash_out": "50"},
    {"name": "Bob", "buy_in": "30", "cash_out": "50"},
    {"name": "Carol", "buy_in": "100", "cash_out": "50"},
]


async def _create_session(test_client: AsyncClient, **extra) -> dict:
    """Helper to create a session and return the response dict."""
    resp = await test_client.post("/api/sessions", json={"players": PLAYERS, **extra})
    assert resp.status_code == 201
    return resp.json()


# ---------------------------------------------------------------------------
# POST /api/sessions/preview
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
class TestPreviewRoute:

    async def test_preview_returns_transfers(self, test_client: AsyncClient):
        resp = await test_client.post("/api/sessions/preview", json={"players": PLAYERS})
        assert resp.status_code == 200
        data = resp.json()
        assert data["transfers"] == [
            {"from": "Carol", "to": "Alice", "amount": "30.00"},
            {"from": "Carol", "to": "Bob", "amount": "20.00"},
        ]
        assert data["total_pot"] == "150"

    async def test_preview_does_not_store(self, test_client: AsyncClient, route_db):
        await test_client.post("/api/sessions/preview", json={"players": PLAYERS})
        assert await route_db.sessions.count_documents({}) == 0

    async def test_preview_accepts_numeric_amounts(self, test_client: AsyncClient):
        resp = await test_client.post(
            "/api/sessions/preview",
            json={"players": [
                {"name": "A", "buy_in": 50, "cash_out": 100},
                {"name": "B", "buy_in": 100, "cash_out": 50},
            ]},
        )
        assert resp.status_code == 200
        assert resp.json()["transfers"] == [{"from": "B", "to": "A", "amount": "50.00"}]


# ---------------------------------------------------------------------------
# POST /api/sessions
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
class TestCreateSessionRoute:

    async def test_create_returns_201(self, test_client: AsyncClient):
        data = await _create_session(test_client)
        assert ObjectId.is_valid(data["session_id"])
        assert [p["name"] for p in data["players"]] == ["Alice", "Bob", "Carol"]
        assert len(data["transfers"]) == 2
        assert data["total_pot"] == "150"

    async def test_create_with_played_at(self, test_client: AsyncClient):
        data = await _create_session(test_client, played_at="2024-03-01T20:00:00Z")
        assert data["played_at"].startswith("2024-03-01T20:00:00")

    async def test_duplicate_names_rejected(self, test_client: AsyncClient):
        resp = await test_client.post(
            "/api/sessions",
            json={"players": [
                {"name": "Alice", "buy_in": "50", "cash_out": "50"},
                {"name": "alice ", "buy_in": "50", "cash_out": "50"},
            ]},
        )
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "DUPLICATE_NAMES"

    async def test_incomplete_fields_rejected(self, test_client: AsyncClient):
        resp = await test_client.post(
            "/api/sessions",
            json={"players": [
                {"name": "Alice", "buy_in": "abc", "cash_out": "50"},
                {"name": "Bob", "buy_in": "50", "cash_out": "50"},
            ]},
        )
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "INCOMPLETE_FIELDS"

    @pytest.mark.parametrize("amount", ["1e30", "3.015"])
    async def test_out_of_range_amount_rejected(self, test_client: AsyncClient, amount):
        resp = await test_client.post(
            "/api/sessions/preview",
            json={"players": [
                {"name": "A", "buy_in": amount, "cash_out": "0"},
                {"name": "B", "buy_in": "0", "cash_out": amount},
            ]},
        )
        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "INCOMPLETE_FIELDS"

    async def test_unbalanced_rejected_with_totals(self, test_client: AsyncClient):
        resp = await test_client.post(
            "/api/sessions",
            json={"players": [
                {"name": "A", "buy_in": "100.00", "cash_out": "0"},
                {"name": "B", "buy_in": "0", "cash_out": "100.01"},
            ]},
        )
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["error"] == "UNBALANCED"
        assert detail["total_buy_in"] == "100.00"
        assert detail["total_cash_out"] == "100.01"

    async def test_missing_players_key_is_rejected(self, test_client: AsyncClient):
        resp = await test_client.post("/api/sessions", json={})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# GET /api/sessions and GET /api/sessions/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
class TestReadRoutes:

    async def test_list_sessions(self, test_client: AsyncClient):
        await _create_session(test_client, played_at="2024-01-01T00:00:00Z")
        await _create_session(test_client, played_at="2024-02-01T00:00:00Z")

        resp = await test_client.get("/api/sessions")
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_count"] == 2
        assert data["sessions"][0]["played_at"].startswith("2024-02-01")
        assert data["sessions"][0]["player_count"] == 3
        assert data["sessions"][0]["transfer_count"] == 2

    async def test_list_sessions_limit(self, test_client: AsyncClient):
        for _ in range(3):
            await _create_session(test_client)
        resp = await test_client.get("/api/sessions", params={"limit": 2})
        assert len(resp.json()["sessions"]) == 2

    async def test_get_session_detail(self, test_client: AsyncClient):
        created = await _create_session(test_client)
        resp = await test_client.get(f"/api/sessions/{created['session_id']}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["transfers"] == created["transfers"]
        assert [s["name"] for s in data["standings"]] == ["Alice", "Bob", "Carol"]
        assert data["standings"][0]["profit"] == "30"

    async def test_get_unknown_session_returns_404(self, test_client: AsyncClient):
        resp = await test_client.get(f"/api/sessions/{ObjectId()}")
        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# DELETE /api/sessions/{id}
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
class TestDeleteRoute:

    async def test_delete_session(self, test_client: AsyncClient):
        created = await _create_session(test_client)
        resp = await test_client.delete(f"/api/sessions/{created['session_id']}")
        assert resp.status_code == 204

        resp = await test_client.get(f"/api/sessions/{created['session_id']}")
        assert resp.status_code == 404

    async def test_delete_unknown_session_returns_404(self, test_client: AsyncClient):
        resp = await test_client.delete(f"/api/sessions/{ObjectId()}")
        assert resp.status_code == 404
