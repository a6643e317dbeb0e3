import pytest
from httpx import AsyncClient
from sqlmodel import select

from lexintake.domain.entities import AuditEvent, Client, MarketingLead
from tests.utils.api_client import issue_api_key, signup


@pytest.mark.asyncio
async def test_missing_api_key(client: AsyncClient):
    response = await client.post("/api/external/clients", json={"full_name": "Jane Doe", "email": "jane@example.com"})

    assert response.status_code == 401
    assert response.json() == {"error": "Missing API key"}


@pytest.mark.asyncio
async def test_malformed_and_unknown_keys_look_alike(client: AsyncClient):
    body = {"full_name": "Jane Doe", "email": "jane@example.com"}

    malformed = await client.post("/api/external/clients", json=body, headers={"x-firm-api-key": "nope"})
    unknown = await client.post(
        "/api/external/clients",
        json=body,
        headers={"x-firm-api-key": "sk_deadbeef_" + "0" * 64},
    )

    assert malformed.status_code == unknown.status_code == 401
    assert malformed.json() == unknown.json() == {"error": "Invalid API key"}


@pytest.mark.asyncio
async def test_missing_scope(client: AsyncClient, owner):
    api_key = await issue_api_key(client, owner["firm_id"], scopes=["leads:write"])

    response = await client.post(
        "/api/external/clients",
        json={"full_name": "Jane Doe", "email": "jane@example.com"},
        headers={"x-firm-api-key": api_key},
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Insufficient scope"}


@pytest.mark.asyncio
async def test_admin_scope_grants_everything(client: AsyncClient, owner):
    api_key = await issue_api_key(client, owner["firm_id"], scopes=["admin"])

    response = await client.get("/api/external/export/matters", headers={"x-firm-api-key": api_key})

    assert response.status_code == 200
    assert response.json() == {"firm_id": owner["firm_id"], "items": []}


@pytest.mark.asyncio
async def test_client_upsert_creates_then_updates(client: AsyncClient, owner, db_session):
    """External client upsert

    Given a client pushed with an external_id
    When the same external_id is pushed again with a new city
    Then the first call creates (201) and the second updates in place (200)
    """
    api_key = await issue_api_key(client, owner["firm_id"])
    headers = {"x-firm-api-key": api_key}

    first = await client.post(
        "/api/external/clients",
        json={"external_id": "CRM-1", "full_name": "Jane Doe", "email": "Jane@Example.com", "city": "Austin"},
        headers=headers,
    )
    second = await client.post(
        "/api/external/clients",
        json={"external_id": "CRM-1", "full_name": "Jane Doe", "city": "Dallas"},
        headers=headers,
    )

    assert first.status_code == 201
    assert first.json()["created"] is True
    assert second.status_code == 200
    assert second.json()["created"] is False
    assert second.json()["client"]["id"] == first.json()["client"]["id"]
    assert second.json()["client"]["city"] == "Dallas"
    assert second.json()["client"]["email"] == "jane@example.com"

    clients = (await db_session.exec(select(Client))).all()
    assert len(clients) == 1
    assert str(clients[0].firm_id) == owner["firm_id"]


@pytest.mark.asyncio
async def test_client_upsert_requires_match_key(client: AsyncClient, owner):
    api_key = await issue_api_key(client, owner["firm_id"])

    response = await client.post(
        "/api/external/clients", json={"full_name": "Jane Doe"}, headers={"x-firm-api-key": api_key}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Either external_id or email must be provided for upsert"}


@pytest.mark.asyncio
async def test_upsert_never_matches_another_firms_client(client: AsyncClient, owner, db_session):
    owner_key = await issue_api_key(client, owner["firm_id"])
    other = await signup(client, "partner@joneslaw.com", firm_name="Jones Law")
    other_key = await issue_api_key(client, other["firm_id"])
    body = {"full_name": "Jane Doe", "email": "jane@example.com"}

    await client.post("/api/external/clients", json=body, headers={"x-firm-api-key": owner_key})
    response = await client.post("/api/external/clients", json=body, headers={"x-firm-api-key": other_key})

    assert response.status_code == 201
    assert len((await db_session.exec(select(Client))).all()) == 2


@pytest.mark.asyncio
async def test_integration_lead(client: AsyncClient, owner, db_session):
    api_key = await issue_api_key(client, owner["firm_id"])
    headers = {"x-firm-api-key": api_key}

    created = await client.post("/api/external/leads", json={"email": "lead@example.com"}, headers=headers)
    duplicate = await client.post("/api/external/leads", json={"email": "LEAD@example.com"}, headers=headers)

    assert created.status_code == 201
    assert created.json()["success"] is True
    assert duplicate.status_code == 200
    assert duplicate.json() == {"message": "Email already registered"}

    lead = (await db_session.exec(select(MarketingLead))).one()
    assert str(lead.firm_id) == owner["firm_id"]
    assert lead.source == "firm_integration"


@pytest.mark.asyncio
async def test_update_matter_by_external_ref(client: AsyncClient, owner, db_session):
    created = await client.post("/api/clients", json={"name": "Jane Doe"})
    matter = await client.post(
        "/api/matters",
        json={
            "client_id": created.json()["id"],
            "title": "Purchase of 12 Elm Street",
            "matter_type": "real_estate_purchase",
            "external_ref": "CASE-42",
        },
    )
    assert matter.status_code == 201
    api_key = await issue_api_key(client, owner["firm_id"], scopes=["matters:write", "matters:read"])

    response = await client.post(
        "/api/external/matters",
        json={"matter_external_ref": "CASE-42", "status": "closed", "deletion_due_date": "2031-01-01"},
        headers={"x-firm-api-key": api_key},
    )

    assert response.status_code == 200
    assert response.json()["matter"]["status"] == "closed"
    assert response.json()["matter"]["deletion_due_date"] == "2031-01-01"

    event = (
        await db_session.exec(
            select(AuditEvent).where(AuditEvent.entity_type == "matter", AuditEvent.event_type == "update")
        )
    ).one()
    assert event.details["previous"]["status"] == "open"
    assert event.details["update"] == {"status": "closed", "deletion_due_date": "2031-01-01"}

    exported = await client.get("/api/external/export/matters", headers={"x-firm-api-key": api_key})
    assert [m["external_ref"] for m in exported.json()["items"]] == ["CASE-42"]


@pytest.mark.asyncio
async def test_update_matter_requires_locator(client: AsyncClient, owner):
    api_key = await issue_api_key(client, owner["firm_id"], scopes=["matters:write"])

    response = await client.post(
        "/api/external/matters", json={"status": "closed"}, headers={"x-firm-api-key": api_key}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_export_limit_bounds(client: AsyncClient, owner):
    api_key = await issue_api_key(client, owner["firm_id"])

    response = await client.get(
        "/api/external/export/matters", params={"limit": 5001}, headers={"x-firm-api-key": api_key}
    )

    assert response.status_code == 400
