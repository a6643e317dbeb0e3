import secrets

import pytest
from httpx import AsyncClient

from config import ApplicationConfig
from lexintake.adapter.services.counter_store import MemoryCounterStore
from lexintake.app.services.api_keys import parse_key_prefix
from lexintake.app.services.rate_limiter import RateLimiter, build_policies
from lexintake.depends import get_rate_limiter
from tests.utils.api_client import issue_api_key, signup


def fake_api_key(prefix: str = None) -> str:
    prefix = prefix or f"sk_{secrets.token_hex(4)}"
    return f"{prefix}_{secrets.token_hex(32)}"


def use_policies(app, **overrides):
    limiter = RateLimiter(MemoryCounterStore(), policies=build_policies(overrides))
    app.dependency_overrides[get_rate_limiter] = lambda: limiter


@pytest.mark.asyncio
async def test_signin_is_limited_per_address(client: AsyncClient):
    """Five sign-in attempts per 15 minutes, then 429 with Retry-After"""
    await signup(client, "owner@smithlaw.com")

    for _ in range(5):
        response = await client.post(
            "/auth/signin", json={"email": "owner@smithlaw.com", "password": "WrongPassword!"}
        )
        assert response.status_code == 401

    response = await client.post(
        "/auth/signin", json={"email": "owner@smithlaw.com", "password": "WrongPassword!"}
    )

    assert response.status_code == 429
    assert int(response.headers["Retry-After"]) > 0
    assert response.headers["X-RateLimit-Limit"] == "5"
    assert response.headers["X-RateLimit-Remaining"] == "0"
    assert response.json()["error"] == "Too many requests. Please try again later."


@pytest.mark.asyncio
async def test_signin_limit_ignores_api_key_header(client: AsyncClient):
    """A fresh, well-formed x-firm-api-key on every attempt does not buy a new bucket"""
    await signup(client, "owner@smithlaw.com")
    statuses = []

    for _ in range(8):
        response = await client.post(
            "/auth/signin",
            json={"email": "owner@smithlaw.com", "password": "WrongPassword!"},
            headers={"X-Forwarded-For": "203.0.113.7", "x-firm-api-key": fake_api_key()},
        )
        statuses.append(response.status_code)

    assert statuses == [401] * 5 + [429] * 3


@pytest.mark.asyncio
async def test_public_lead_limit_ignores_api_key_header(client: AsyncClient):
    statuses = []

    for i in range(12):
        response = await client.post(
            "/api/public/leads",
            json={"email": f"lead{i}@example.com"},
            headers={"X-Forwarded-For": "203.0.113.7", "x-firm-api-key": fake_api_key()},
        )
        statuses.append(response.status_code)

    assert statuses == [201] * 10 + [429] * 2


@pytest.mark.asyncio
async def test_limits_are_per_client_address(client: AsyncClient):
    for _ in range(10):
        response = await client.post(
            "/api/public/leads",
            json={"email": "lead@example.com"},
            headers={"X-Forwarded-For": "203.0.113.7"},
        )
        assert response.status_code in (200, 201)

    blocked = await client.post(
        "/api/public/leads",
        json={"email": "other@example.com"},
        headers={"X-Forwarded-For": "203.0.113.7"},
    )
    other_address = await client.post(
        "/api/public/leads",
        json={"email": "other@example.com"},
        headers={"X-Forwarded-For": "198.51.100.1"},
    )

    assert blocked.status_code == 429
    assert other_address.status_code == 201


@pytest.mark.asyncio
async def test_forged_prefix_cannot_spend_a_firms_quota(client: AsyncClient, app, owner):
    """Per-key quota

    Given a firm's key whose prefix is known to someone without the secret
    When that caller sends the prefix with a wrong secret from several addresses
    Then every attempt is refused and the firm's own quota is untouched
    """
    use_policies(app, external_api=[2, 3600])
    api_key = await issue_api_key(client, owner["firm_id"])
    forged = fake_api_key(parse_key_prefix(api_key))

    for i in range(4):
        response = await client.get(
            "/api/external/export/matters",
            headers={"x-firm-api-key": forged, "X-Forwarded-For": f"198.51.100.{i}"},
        )
        assert response.status_code == 401

    statuses = []
    for _ in range(3):
        response = await client.get("/api/external/export/matters", headers={"x-firm-api-key": api_key})
        statuses.append(response.status_code)

    assert statuses == [200, 200, 429]


@pytest.mark.asyncio
async def test_api_key_attempts_are_limited_per_address(client: AsyncClient, app, owner):
    use_policies(app, api_key_auth=[3, 60])
    api_key = await issue_api_key(client, owner["firm_id"])
    headers = {"X-Forwarded-For": "203.0.113.7"}
    statuses = []

    for _ in range(3):
        response = await client.get(
            "/api/external/export/matters", headers={**headers, "x-firm-api-key": fake_api_key()}
        )
        statuses.append(response.status_code)

    # Guessing from this address is cut off, even with a valid key
    blocked = await client.get(
        "/api/external/export/matters", headers={**headers, "x-firm-api-key": api_key}
    )
    elsewhere = await client.get(
        "/api/external/export/matters",
        headers={"X-Forwarded-For": "198.51.100.1", "x-firm-api-key": api_key},
    )

    assert statuses == [401, 401, 401]
    assert blocked.status_code == 429
    assert elsewhere.status_code == 200


@pytest.mark.asyncio
async def test_key_rotation_is_rate_limited(client: AsyncClient, owner):
    headers = {"x-internal-admin-key": ApplicationConfig.INTERNAL_ADMIN_KEY}
    statuses = []

    for _ in range(11):
        response = await client.post(
            "/api/firms/rotate-api-key", json={"firm_id": owner["firm_id"]}, headers=headers
        )
        statuses.append(response.status_code)

    assert statuses == [200] * 10 + [429]
    assert int(response.headers["Retry-After"]) > 0
