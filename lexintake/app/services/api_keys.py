"""
Firm API key material.

Keys look like ``sk_<prefix>_<secret>``: an 8-hex-char lookup prefix that is
safe to log and index, and a 64-hex-char secret. Only a per-key random salt
and HMAC-SHA256(salt, full key) are persisted.
"""

import hashlib
import hmac
import re
import secrets
from typing import NamedTuple, Optional

KEY_PATTERN = re.compile(r"^(sk_[0-9a-f]{8})_[0-9a-f]{64}$")

# Used when no record matches a prefix, so the comparison still runs.
_DUMMY_SALT = "0" * 32
_DUMMY_DIGEST = "0" * 64


class GeneratedKey(NamedTuple):
    key: str
    prefix: str
    salt: str
    digest: str


def hash_api_key(key: str, salt: str) -> str:
    return hmac.new(salt.encode(), key.encode(), hashlib.sha256).hexdigest()


def generate_api_key() -> GeneratedKey:
    prefix = f"sk_{secrets.token_hex(4)}"
    key = f"{prefix}_{secrets.token_hex(32)}"
    salt = secrets.token_hex(16)
    return GeneratedKey(key=key, prefix=prefix, salt=salt, digest=hash_api_key(key, salt))


def parse_key_prefix(raw_key: Optional[str]) -> Optional[str]:
    """Return the lookup prefix of a well-formed key, else None."""
    if not raw_key:
        return None
    match = KEY_PATTERN.match(raw_key.strip())
    return match.group(1) if match else None


def verify_api_key(raw_key: str, salt: Optional[str], stored_digest: Optional[str]) -> bool:
    """Constant-time check of a presented key against the stored digest."""
    if salt is None or stored_digest is None:
        hmac.compare_digest(hash_api_key(raw_key, _DUMMY_SALT), _DUMMY_DIGEST)
        return False
    return hmac.compare_digest(hash_api_key(raw_key, salt), stored_digest)
