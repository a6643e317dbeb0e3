from datetime import datetime
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def create_session_token(session_id: UUID, user_id: UUID, firm_id: UUID, expires_at: datetime) -> str:
    """
    Sign the session_token cookie value.

    Args:
        session_id: Server-side Session row id
        user_id: Profile UUID
        firm_id: Firm UUID
        expires_at: Naive UTC expiry, matching the session row

    Returns:
        JWT token string (HS256)
    """
    payload = {
        "sid": str(session_id),
        "user_id": str(user_id),
        "firm_id": str(firm_id),
        "exp": int((expires_at - datetime(1970, 1, 1)).total_seconds()),
    }
    return jwt.encode(payload, ApplicationConfig.SESSION_SECRET, algorithm="HS256")


def verify_session_token(token: str) -> Optional[dict]:
    """
    Verify and decode a session token.

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        return jwt.decode(token, ApplicationConfig.SESSION_SECRET, algorithms=["HS256"])
    except JWTError:
        return None
