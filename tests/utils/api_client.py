from http.cookies import SimpleCookie
from typing import Dict, List, Optional

from httpx import AsyncClient, Response

from config import ApplicationConfig

PASSWORD = "SecurePass123!"


def response_cookies(response: Response) -> Dict[str, str]:
    cookies = {}
    for header in response.headers.get_list("set-cookie"):
        parsed = SimpleCookie()
        parsed.load(header)
        cookies.update({name: morsel.value for name, morsel in parsed.items()})
    return cookies


def use_session(client: AsyncClient, cookies: Optional[Dict[str, str]]) -> None:
    """Make subsequent requests carry exactly these session cookies."""
    client.cookies.clear()
    for name, value in (cookies or {}).items():
        client.cookies.set(name, value)


async def signup(client: AsyncClient, email: str, firm_name: str = "Smith Law") -> Dict[str, str]:
    response = await client.post(
        "/auth/signup",
        json={
            "email": email,
            "password": PASSWORD,
            "confirm_password": PASSWORD,
            "firm_name": firm_name,
        },
    )
    assert response.status_code == 201
    return response.json()


async def signin(client: AsyncClient, email: str) -> Dict[str, str]:
    """Sign in and switch the client to that session; returns the cookies."""
    response = await client.post("/auth/signin", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200
    cookies = response_cookies(response)
    use_session(client, cookies)
    return cookies


async def issue_api_key(client: AsyncClient, firm_id: str, scopes: Optional[List[str]] = None) -> str:
    body = {"firm_id": firm_id}
    if scopes is not None:
        body["scopes"] = scopes
    response = await client.post(
        "/api/firms/rotate-api-key",
        json=body,
        headers={"x-internal-admin-key": ApplicationConfig.INTERNAL_ADMIN_KEY},
    )
    assert response.status_code == 200
    return response.json()["api_key"]
