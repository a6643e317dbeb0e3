from fastapi import Response

from config import ApplicationConfig

SESSION_COOKIES = ("firm_id", "user_id", "session_token")


def set_session_cookies(response: Response, firm_id: str, user_id: str, session_token: str) -> None:
    max_age = ApplicationConfig.SESSION_TTL_DAYS * 24 * 60 * 60
    for name, value in zip(SESSION_COOKIES, (firm_id, user_id, session_token)):
        response.set_cookie(
            key=name,
            value=value,
            max_age=max_age,
            path="/",
            httponly=True,
            samesite="lax",
            secure=ApplicationConfig.COOKIE_SECURE,
        )


def clear_session_cookies(response: Response) -> None:
    for name in SESSION_COOKIES:
        response.delete_cookie(
            key=name,
            path="/",
            httponly=True,
            samesite="lax",
            secure=ApplicationConfig.COOKIE_SECURE,
        )
