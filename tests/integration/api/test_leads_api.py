import pytest
from httpx import AsyncClient
from sqlmodel import select

from lexintake.domain import lawful_basis
from lexintake.domain.entities import AuditEvent, MarketingLead


@pytest.mark.asyncio
async def test_public_lead_is_captured(client: AsyncClient, db_session):
    response = await client.post(
        "/api/public/leads",
        json={"email": "Jane@Example.com", "full_name": "Jane Doe", "state": "TX"},
    )

    assert response.status_code == 201
    assert response.json()["message"] == "Lead saved"
    lead = (await db_session.exec(select(MarketingLead))).one()
    assert lead.email == "jane@example.com"
    assert lead.firm_id is None
    assert lead.source == "public_site"
    assert str(lead.id) == response.json()["lead_id"]


@pytest.mark.asyncio
async def test_public_lead_without_at_sign_is_rejected(client: AsyncClient, db_session):
    response = await client.post("/api/public/leads", json={"email": "jane.example.com"})

    assert response.status_code == 400
    assert response.json() == {"error": "Valid email is required"}
    assert (await db_session.exec(select(MarketingLead))).all() == []


@pytest.mark.asyncio
async def test_duplicate_public_lead(client: AsyncClient, db_session):
    await client.post("/api/public/leads", json={"email": "jane@example.com"})

    response = await client.post("/api/public/leads", json={"email": "jane@example.com"})

    assert response.status_code == 200
    assert response.json() == {"message": "Email already registered"}
    assert len((await db_session.exec(select(MarketingLead))).all()) == 1


@pytest.mark.asyncio
async def test_dashboard_lead_belongs_to_firm(client: AsyncClient, owner, db_session):
    response = await client.post("/api/leads", json={"email": "prospect@example.com"})
    assert response.status_code == 201

    listed = await client.get("/api/leads")

    assert listed.status_code == 200
    assert listed.json()["count"] == 1
    lead = listed.json()["data"][0]
    assert lead["firm_id"] == owner["firm_id"]
    assert lead["source"] == "dashboard"

    events = (
        await db_session.exec(select(AuditEvent).where(AuditEvent.entity_type == "marketing_lead"))
    ).all()
    assert len(events) == 1
    assert events[0].lawful_basis == lawful_basis.LEAD_GENERATION
