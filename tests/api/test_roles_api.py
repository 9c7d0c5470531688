"""Roles API: CRUD, duplication, seeding and system-role protection."""

import pytest
from httpx import AsyncClient

from tests.conftest import TENANT_ID

ROLES = "/api/v1/roles"


async def _role_id(client: AsyncClient, headers: dict[str, str], name: str) -> str:
    response = await client.get(ROLES, headers=headers)
    return next(r["id"] for r in response.json() if r["name"] == name)


async def test_list_roles_returns_seeded_roles(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.get(ROLES, headers=auth_headers)
    assert response.status_code == 200
    roles = response.json()
    assert [r["name"] for r in roles] == ["Admin Cabinet", "Agent", "Back-office", "Manager"]
    assert all(r["is_system_role"] for r in roles)
    assert all(r["tenant_id"] == TENANT_ID for r in roles)


async def test_create_role_returns_201_with_defaults(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(ROLES, headers=auth_headers, json={"name": "Souscripteur"})
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Souscripteur"
    assert data["is_system_role"] is False
    assert data["dashboard_scope"] == "personal"
    assert data["can_see_own_commissions"] is True
    assert data["can_see_team_commissions"] is False


async def test_create_role_with_blank_name_returns_400(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(ROLES, headers=auth_headers, json={"name": "   "})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_create_role_with_taken_name_returns_409(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(ROLES, headers=auth_headers, json={"name": "Agent"})
    assert response.status_code == 409
    assert response.json()["error"] == "DUPLICATE_ROLE_NAME"


async def test_update_custom_role(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = (
        await client.post(ROLES, headers=auth_headers, json={"name": "Chef"})
    ).json()
    response = await client.patch(
        f"{ROLES}/{created['id']}",
        headers=auth_headers,
        json={"dashboard_scope": "team", "description": "Equipe nord"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["dashboard_scope"] == "team"
    assert data["description"] == "Equipe nord"
    assert data["name"] == "Chef"


async def test_update_rejects_system_flag_in_body(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    created = (await client.post(ROLES, headers=auth_headers, json={"name": "X"})).json()
    response = await client.patch(
        f"{ROLES}/{created['id']}", headers=auth_headers, json={"is_system_role": True}
    )
    assert response.status_code == 422


@pytest.mark.parametrize("field", ["is_active", "dashboard_scope", "name"])
async def test_update_with_null_required_field_returns_422(
    client: AsyncClient, auth_headers: dict[str, str], field: str
) -> None:
    created = (await client.post(ROLES, headers=auth_headers, json={"name": "Nul"})).json()
    response = await client.patch(
        f"{ROLES}/{created['id']}", headers=auth_headers, json={field: None}
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"

    unchanged = await client.get(f"{ROLES}/{created['id']}", headers=auth_headers)
    assert unchanged.json()["is_active"] is True
    assert unchanged.json()["dashboard_scope"] == "personal"


async def test_update_with_null_description_clears_it(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    created = (
        await client.post(
            ROLES, headers=auth_headers, json={"name": "Décrit", "description": "Texte"}
        )
    ).json()
    response = await client.patch(
        f"{ROLES}/{created['id']}", headers=auth_headers, json={"description": None}
    )
    assert response.status_code == 200
    assert response.json()["description"] is None


async def test_system_role_update_and_delete_return_403(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    agent_id = await _role_id(client, auth_headers, "Agent")
    response = await client.patch(
        f"{ROLES}/{agent_id}", headers=auth_headers, json={"name": "Agent 2"}
    )
    assert response.status_code == 403
    assert response.json()["error"] == "SYSTEM_ROLE_PROTECTED"

    response = await client.delete(f"{ROLES}/{agent_id}", headers=auth_headers)
    assert response.status_code == 403


async def test_delete_custom_role(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = (await client.post(ROLES, headers=auth_headers, json={"name": "Tmp"})).json()
    response = await client.delete(f"{ROLES}/{created['id']}", headers=auth_headers)
    assert response.status_code == 204

    response = await client.get(f"{ROLES}/{created['id']}", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"


async def test_duplicate_system_role(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    agent_id = await _role_id(client, auth_headers, "Agent")
    response = await client.post(
        f"{ROLES}/{agent_id}/duplicate",
        headers=auth_headers,
        json={"name": "Agent Junior"},
    )
    assert response.status_code == 201
    copy = response.json()
    assert copy["is_system_role"] is False
    assert copy["description"] == "Copie de Agent"

    source = (
        await client.get(f"{ROLES}/{agent_id}/permissions", headers=auth_headers)
    ).json()
    copied = (
        await client.get(f"{ROLES}/{copy['id']}/permissions", headers=auth_headers)
    ).json()
    assert copied["matrix"] == source["matrix"]


async def test_initialize_defaults_is_idempotent(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(f"{ROLES}/initialize-defaults", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["already_initialized"] is True
    assert data["created_role_ids"] == []


async def test_list_excludes_inactive_on_request(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    created = (await client.post(ROLES, headers=auth_headers, json={"name": "Off"})).json()
    await client.patch(
        f"{ROLES}/{created['id']}", headers=auth_headers, json={"is_active": False}
    )
    response = await client.get(
        ROLES, headers=auth_headers, params={"include_inactive": "false"}
    )
    assert "Off" not in [r["name"] for r in response.json()]
