"""
Rotate API Key Use Case

Issues a new firm API key and retires every previous one.
"""

import logging
from datetime import timedelta
from typing import List, Optional
from uuid import UUID

from lexintake.app.services.api_keys import generate_api_key
from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import ApiKey, ApiScope, AuditEvent, AuditEventType
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import RotatedApiKey

logger = logging.getLogger(__name__)

VALID_SCOPES = {scope.value for scope in ApiScope}


class RotateApiKeyUseCase:
    """
    Business Rules:
    - Firm must exist
    - Previous keys are deactivated in the same transaction that creates the
      new one, so a firm never has two active keys
    - Scopes carry over from the current key unless new ones are given;
      a firm without a key gets the configured defaults
    - rotation_count is one more than the highest previous count
    - New keys expire after ttl_days (90 by default)
    - Plaintext is returned once and never stored
    """

    def __init__(self, uow: UnitOfWork, ttl_days: int = 90, default_scopes: Optional[List[str]] = None):
        self.uow = uow
        self.audit = AuditRecorder(uow)
        self.ttl_days = ttl_days
        self.default_scopes = list(default_scopes or [])

    async def execute(
        self,
        firm_id: UUID,
        scopes: Optional[List[str]] = None,
        ip_address: Optional[str] = None,
    ) -> Result[RotatedApiKey]:
        if scopes is not None:
            unknown = sorted(set(scopes) - VALID_SCOPES)
            if unknown or not scopes:
                return Return.err(
                    Error(ErrorCode.VALIDATION_FAILED, "Invalid scopes", details={"unknown": unknown})
                )

        async with self.uow:
            firm = await self.uow.firms.get_by_id(firm_id)
            if firm is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Firm not found"))

            previous = await self.uow.api_keys.list_by_firm(firm_id)
            active = [k for k in previous if k.is_active]

            if scopes is None:
                if active:
                    latest = max(active, key=lambda k: k.created_at)
                    scopes = list(latest.scopes or [])
                else:
                    scopes = list(self.default_scopes)
            rotation_count = max((k.rotation_count for k in previous), default=-1) + 1

            now = utc_now()
            generated = generate_api_key()

            revoked = await self.uow.api_keys.deactivate_all_for_firm(firm_id, now)
            await self.uow.api_keys.create(
                ApiKey(
                    firm_id=firm_id,
                    key_prefix=generated.prefix,
                    key_salt=generated.salt,
                    key_hash=generated.digest,
                    scopes=scopes,
                    rotation_count=rotation_count,
                    created_at=now,
                    expires_at=now + timedelta(days=self.ttl_days),
                )
            )
            firm.api_key_rotated_at = now
            await self.uow.firms.update(firm)
            await self.uow.commit()

            logger.info(f"[API_KEY] Rotated key for firm {firm_id}: {generated.prefix} (revoked {revoked})")

            response = RotatedApiKey(
                firm_id=firm_id,
                api_key=generated.key,
                key_prefix=generated.prefix,
                scopes=scopes,
                expires_at=now + timedelta(days=self.ttl_days),
                rotation_count=rotation_count,
            )

            await self.audit.record(
                AuditEvent(
                    firm_id=firm_id,
                    event_type=AuditEventType.api_key_rotated.value,
                    entity_type="firm",
                    entity_id=str(firm_id),
                    ip_address=ip_address,
                    details={
                        "key_prefix": generated.prefix,
                        "scopes": scopes,
                        "rotation_count": rotation_count,
                        "revoked_keys": revoked,
                    },
                    lawful_basis=lawful_basis.KEY_ROTATION,
                )
            )
            return Return.ok(response)
