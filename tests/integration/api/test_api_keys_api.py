import pytest
from httpx import AsyncClient
from sqlmodel import select

from config import ApplicationConfig
from lexintake.app.services.api_keys import parse_key_prefix
from lexintake.domain.entities import ApiKey
from tests.utils.api_client import issue_api_key

ADMIN_HEADERS = {"x-internal-admin-key": ApplicationConfig.INTERNAL_ADMIN_KEY}


@pytest.mark.asyncio
async def test_rotate_requires_admin_key(client: AsyncClient, owner):
    response = await client.post(
        "/api/firms/rotate-api-key",
        json={"firm_id": owner["firm_id"]},
        headers={"x-internal-admin-key": "wrong"},
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


@pytest.mark.asyncio
async def test_rotate_issues_key_with_default_scopes(client: AsyncClient, owner):
    response = await client.post(
        "/api/firms/rotate-api-key", json={"firm_id": owner["firm_id"]}, headers=ADMIN_HEADERS
    )

    assert response.status_code == 200
    data = response.json()
    assert data["firm_id"] == owner["firm_id"]
    assert data["api_key"].startswith(data["key_prefix"])
    assert data["scopes"] == ApplicationConfig.DEFAULT_API_KEY_SCOPES
    assert data["rotation_count"] == 0
    assert data["expires_at"]


@pytest.mark.asyncio
async def test_rotate_unknown_firm(client: AsyncClient):
    response = await client.post(
        "/api/firms/rotate-api-key",
        json={"firm_id": "00000000-0000-0000-0000-000000000000"},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_rotation_leaves_one_active_key(client: AsyncClient, owner, db_session):
    """Rotating twice

    Given a firm whose key has already been rotated once
    When it is rotated again
    Then only the newest key is active, the old key is rejected, and the
    scopes carry over
    """
    old_key = await issue_api_key(client, owner["firm_id"], scopes=["clients:write"])
    new_key = await issue_api_key(client, owner["firm_id"])

    db_session.expire_all()
    keys = (await db_session.exec(select(ApiKey))).all()
    assert len(keys) == 2
    active = [k for k in keys if k.is_active]
    assert len(active) == 1
    assert active[0].rotation_count == 1
    assert active[0].scopes == ["clients:write"]
    assert new_key.startswith(active[0].key_prefix)

    body = {"full_name": "Jane Doe", "email": "jane@example.com"}
    rejected = await client.post("/api/external/clients", json=body, headers={"x-firm-api-key": old_key})
    accepted = await client.post("/api/external/clients", json=body, headers={"x-firm-api-key": new_key})

    assert rejected.status_code == 401
    assert rejected.json() == {"error": "API key has been revoked"}
    assert accepted.status_code == 201


@pytest.mark.asyncio
async def test_rotate_rejects_unknown_scopes(client: AsyncClient, owner):
    response = await client.post(
        "/api/firms/rotate-api-key",
        json={"firm_id": owner["firm_id"], "scopes": ["clients:write", "everything"]},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 400
    assert response.json()["details"] == {"unknown": ["everything"]}


@pytest.mark.asyncio
async def test_revoke_api_key(client: AsyncClient, owner):
    api_key = await issue_api_key(client, owner["firm_id"])
    key_prefix = parse_key_prefix(api_key)

    response = await client.post(
        "/api/firms/revoke-api-key",
        json={"firm_id": owner["firm_id"], "key_prefix": key_prefix},
        headers=ADMIN_HEADERS,
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "revoked": 1}

    response = await client.get("/api/external/export/matters", headers={"x-firm-api-key": api_key})
    assert response.status_code == 401

    again = await client.post(
        "/api/firms/revoke-api-key", json={"firm_id": owner["firm_id"]}, headers=ADMIN_HEADERS
    )
    assert again.status_code == 404
