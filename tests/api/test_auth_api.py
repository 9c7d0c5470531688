"""Authentication, tenant header and permission enforcement on the RBAC routes."""

import pytest
from httpx import AsyncClient

from tests.conftest import OTHER_TENANT_ID, TENANT_ID, auth_headers_for


@pytest.mark.usefixtures("seeded_tenant")
async def test_missing_token_returns_401(client: AsyncClient) -> None:
    response = await client.get("/api/v1/roles", headers={"X-Tenant-ID": TENANT_ID})
    assert response.status_code == 401
    assert response.json()["error"] == "HTTP_ERROR"


@pytest.mark.usefixtures("seeded_tenant")
async def test_invalid_token_returns_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/roles",
        headers={"Authorization": "Bearer not-a-jwt", "X-Tenant-ID": TENANT_ID},
    )
    assert response.status_code == 401


async def test_missing_tenant_header_returns_400(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    headers = {"Authorization": auth_headers["Authorization"]}
    response = await client.get("/api/v1/roles", headers=headers)
    assert response.status_code == 400


async def test_malformed_tenant_header_returns_400(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    headers = {**auth_headers, "X-Tenant-ID": "bad tenant!"}
    response = await client.get("/api/v1/roles", headers=headers)
    assert response.status_code == 400


async def test_token_for_other_tenant_returns_403(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    headers = {**auth_headers, "X-Tenant-ID": OTHER_TENANT_ID}
    response = await client.get("/api/v1/roles", headers=headers)
    assert response.status_code == 403


@pytest.mark.usefixtures("seeded_tenant")
async def test_user_without_roles_is_denied(client: AsyncClient) -> None:
    """Deny by default: a valid token alone does not grant settings access."""
    headers = auth_headers_for("stranger")
    response = await client.get("/api/v1/roles", headers=headers)
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"

    me = await client.get("/api/v1/users/me/permissions", headers=headers)
    assert me.status_code == 200
    assert me.json()["permissions"] == []


async def test_settings_viewer_cannot_write(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    """Manager holds settings:view but not settings:update."""
    roles = (await client.get("/api/v1/roles", headers=auth_headers)).json()
    manager_id = next(r["id"] for r in roles if r["name"] == "Manager")
    await client.post(
        "/api/v1/role-assignments",
        headers=auth_headers,
        json={"user_id": "manager-1", "role_id": manager_id},
    )
    headers = auth_headers_for("manager-1")

    assert (await client.get("/api/v1/roles", headers=headers)).status_code == 200
    response = await client.post("/api/v1/roles", headers=headers, json={"name": "Nope"})
    assert response.status_code == 403
    assert response.json()["details"] == {"module": "settings", "action": "update"}


@pytest.mark.usefixtures("seeded_tenant")
@pytest.mark.parametrize(
    "path", ["/api/v1/roles", "/api/v1/users/me/permissions"]
)
async def test_user_id_with_separator_returns_401(client: AsyncClient, path: str) -> None:
    response = await client.get(path, headers=auth_headers_for("user:admin"))
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
