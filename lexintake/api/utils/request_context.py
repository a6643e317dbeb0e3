from typing import Optional

from fastapi import Request


def client_ip(request: Request) -> Optional[str]:
    """
    Best-effort client address.

    Priority: first X-Forwarded-For hop, X-Real-IP, then the socket peer.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else None
