"""
API Key Validator

Resolves an opaque x-firm-api-key value to the owning firm and its granted
scopes.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from lexintake.app.services.api_keys import parse_key_prefix, verify_api_key
from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AuditEvent, AuditEventType
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class ApiKeyIdentity(BaseModel):
    """A successfully validated API key"""

    api_key_id: UUID
    firm_id: UUID
    key_prefix: str
    scopes: List[str]
    expires_at: datetime


class ApiKeyValidator:
    """
    Validates firm API keys.

    Business Rules:
    - Lookup by non-secret prefix, then constant-time digest comparison
    - A digest comparison runs even when no record matches the prefix
    - Revocation and expiry are only reported once the caller has proven
      possession of the key
    - Every failed attempt is logged and audited for anomaly detection
    - last_used_at is updated best-effort
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def validate(
        self, raw_key: Optional[str], ip_address: Optional[str] = None
    ) -> Result[ApiKeyIdentity]:
        if not raw_key or not raw_key.strip():
            return Return.err(Error(ErrorCode.MISSING_KEY, "Missing API key"))

        raw_key = raw_key.strip()
        prefix = parse_key_prefix(raw_key)

        async with self.uow:
            if prefix is None:
                await self._record_failure(None, None, "malformed", ip_address)
                return Return.err(Error(ErrorCode.MALFORMED_KEY, "Invalid API key"))

            record = await self.uow.api_keys.get_by_prefix(prefix)

            if record is None:
                verify_api_key(raw_key, None, None)
                await self._record_failure(None, prefix, "unknown_prefix", ip_address)
                return Return.err(Error(ErrorCode.UNKNOWN_KEY, "Invalid API key"))

            if not verify_api_key(raw_key, record.key_salt, record.key_hash):
                await self._record_failure(record.firm_id, prefix, "digest_mismatch", ip_address)
                return Return.err(Error(ErrorCode.UNKNOWN_KEY, "Invalid API key"))

            if not record.is_active:
                await self._record_failure(record.firm_id, prefix, "revoked", ip_address)
                return Return.err(Error(ErrorCode.REVOKED_KEY, "API key has been revoked"))

            now = utc_now()
            if record.expires_at <= now:
                await self._record_failure(record.firm_id, prefix, "expired", ip_address)
                return Return.err(Error(ErrorCode.EXPIRED_KEY, "API key has expired"))

            identity = ApiKeyIdentity(
                api_key_id=record.id,
                firm_id=record.firm_id,
                key_prefix=record.key_prefix,
                scopes=list(record.scopes or []),
                expires_at=record.expires_at,
            )

            try:
                await self.uow.api_keys.touch_last_used(record.id, now)
                await self.uow.commit()
            except Exception as exc:
                logger.warning(f"[API_KEY] Could not update last_used_at for {prefix}: {exc!r}")
                await self.uow.rollback()

            return Return.ok(identity)

    async def _record_failure(
        self,
        firm_id: Optional[UUID],
        prefix: Optional[str],
        reason: str,
        ip_address: Optional[str],
    ) -> None:
        logger.warning(f"[API_KEY] Failed authentication ({reason}) prefix={prefix} ip={ip_address}")
        await self.audit.record(
            AuditEvent(
                firm_id=firm_id,
                event_type=AuditEventType.api_key_auth_failed.value,
                entity_type="api_key",
                entity_id=prefix,
                ip_address=ip_address,
                details={"key_prefix": prefix, "reason": reason},
            )
        )
