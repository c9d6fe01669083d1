"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_readiness_queries_database(client: AsyncClient) -> None:
    """GET /api/v1/health/ready returns 200 when SELECT 1 succeeds."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_request_id_is_echoed_or_generated(client: AsyncClient) -> None:
    """A safe client id is kept; an unsafe one is replaced."""
    kept = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert kept.headers["x-request-id"] == "abc-123"

    replaced = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id!"})
    assert replaced.headers["x-request-id"] != "bad id!"
    assert len(replaced.headers["x-request-id"]) == 32


async def test_security_headers_present(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert "cache-control" not in response.headers


async def test_portal_responses_are_not_cached(client: AsyncClient) -> None:
    response = await client.get("/api/v1/portal/unknown-space/access-settings")
    assert response.status_code == 404
    assert response.headers["cache-control"] == "no-store"


async def test_unknown_route_returns_json_error(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    assert response.json()["error"] == "HTTP_ERROR"
