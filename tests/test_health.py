"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the version."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("version")


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    """A valid incoming X-Request-ID is returned unchanged."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers.get("X-Request-ID") == "abc-123"


async def test_request_id_is_generated_when_missing(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health")
    assert response.headers.get("X-Request-ID")


async def test_catalog_is_public(client: AsyncClient) -> None:
    """GET /api/v1/permissions/catalog needs no token and lists valid pairs."""
    response = await client.get("/api/v1/permissions/catalog")
    assert response.status_code == 200
    data = response.json()
    assert [m["id"] for m in data["modules"]][0] == "clients"
    assert data["module_actions"]["dashboard"] == ["view"]
    assert {"id": "modify_rules", "label": "Modifier règles"} in data["actions"]
