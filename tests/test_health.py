"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert "store_configured" in data


async def test_health_needs_no_tenant(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Tenant-ID": "bad tenant"})
    assert response.status_code == 200


async def test_unknown_route_returns_json_404(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "HTTP_ERROR"
    assert body["details"] == {"method": "GET", "path": "/api/v1/nope"}
