from datetime import UTC, datetime


def utc_now() -> datetime:
    """Naive UTC timestamp; every DateTime column stores naive UTC."""
    return datetime.now(UTC).replace(tzinfo=None)
