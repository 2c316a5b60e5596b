"""
Noteful API — Application-level Tests
======================================

What:  Static fallback, 404 handling, error body shape, request IDs,
       health check and the lifespan-owned database.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from noteful.database import Database
from noteful.main import create_app
from noteful.middleware.request_id import resolve_request_id


class TestStaticServer:

    @pytest.mark.asyncio
    async def test_root_serves_index_page(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")


class TestNotFoundHandler:

    @pytest.mark.asyncio
    async def test_bad_path_is_404(self, test_client):
        response = await test_client.get("/DOESNOTEXIST")

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == 404
        assert body["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_unmatched_method_on_static_path_is_404(self, test_client):
        response = await test_client.post("/DOESNOTEXIST", json={})

        assert response.status_code == 404


class TestErrorFormatting:

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.post(
            "/api/notes", json={}, headers={"X-Request-ID": "abc12345"}
        )

        assert response.status_code == 400
        assert response.headers["x-request-id"] == "abc12345"
        assert response.json() == {
            "status": 400,
            "error": "validation_error",
            "message": "Missing `title` in request body",
            "request_id": "abc12345",
        }

    @pytest.mark.asyncio
    async def test_malformed_json_body_is_400(self, test_client):
        response = await test_client.post(
            "/api/folders",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_connected_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_reports_unreachable_database(self, tmp_path):
        app = create_app()
        app.state.db = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}")
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")
        await app.state.db.dispose()

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestLifespan:

    @pytest.mark.asyncio
    async def test_lifespan_creates_and_releases_database(self):
        app = create_app()
        assert app.state.db is None

        async with app.router.lifespan_context(app):
            assert isinstance(app.state.db, Database)

        assert app.state.db is None


class TestRequestId:

    def test_client_id_is_kept_when_well_formed(self):
        assert resolve_request_id("abc-123.x") == "abc-123.x"

    @pytest.mark.parametrize("value", [None, "", "has space", "x" * 65])
    def test_unusable_client_id_is_replaced(self, value):
        rid = resolve_request_id(value)

        assert rid != value
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_generated_id_is_echoed(self, test_client):
        response = await test_client.get("/api/folders")

        assert len(response.headers["x-request-id"]) == 8
