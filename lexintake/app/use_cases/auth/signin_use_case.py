"""
Signin Use Case

Email/password authentication backed by a server-side session row.
"""

import logging
from datetime import timedelta
from typing import Optional

import bcrypt

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.domain import lawful_basis
from lexintake.domain.base import utc_now
from lexintake.domain.entities import AuditEvent, AuditEventType, Profile, ProfileRole, Session
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import SigninResponse

logger = logging.getLogger(__name__)

# Checked against when the email is unknown so both paths cost one bcrypt verify.
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class SigninUseCase:
    """
    Use case for dashboard sign-in.

    Business Rules:
    - Email is matched case-insensitively
    - Unknown email and wrong password are indistinguishable to the caller
    - A bcrypt comparison runs even when no profile matches
    - Success creates a Session valid for session_ttl_days and stamps last_login_at
    - Every attempt is audited as a login event with details.success
    """

    def __init__(self, uow: UnitOfWork, session_ttl_days: int = 7):
        self.uow = uow
        self.audit = AuditRecorder(uow)
        self.session_ttl_days = session_ttl_days

    async def execute(
        self, email: str, password: str, ip_address: Optional[str] = None
    ) -> Result[SigninResponse]:
        """
        Args:
            email: Email as typed by the user
            password: Plain text password
            ip_address: Client address for the audit trail

        Returns:
            Result with SigninResponse, or Error(INVALID_CREDENTIAL)
        """
        email = (email or "").strip().lower()

        async with self.uow:
            profile = await self.uow.profiles.get_by_email(email)

            if profile is None:
                bcrypt.checkpw(password.encode(), _DUMMY_HASH)
                logger.warning(f"[SIGNIN] Failed sign-in for unknown email from {ip_address}")
                await self._record_login(None, ip_address, success=False)
                return Return.err(Error(ErrorCode.INVALID_CREDENTIAL, INVALID_CREDENTIALS_MESSAGE))

            if not self._password_matches(password, profile.password_hash):
                logger.warning(f"[SIGNIN] Failed sign-in for {profile.id} from {ip_address}")
                await self._record_login(profile, ip_address, success=False)
                return Return.err(Error(ErrorCode.INVALID_CREDENTIAL, INVALID_CREDENTIALS_MESSAGE))

            now = utc_now()
            session = await self.uow.sessions.create(
                Session(
                    profile_id=profile.id,
                    firm_id=profile.firm_id,
                    ip_address=ip_address,
                    expires_at=now + timedelta(days=self.session_ttl_days),
                )
            )
            profile.last_login_at = now
            await self.uow.profiles.update(profile)
            await self.uow.commit()

            response = SigninResponse(
                session_id=session.id,
                firm_id=profile.firm_id,
                user_id=profile.id,
                role=ProfileRole(profile.role).value,
                expires_at=session.expires_at,
            )

            logger.info(f"[SIGNIN] Profile {profile.id} signed in")
            await self._record_login(profile, ip_address, success=True)

            return Return.ok(response)

    @staticmethod
    def _password_matches(password: str, password_hash: Optional[str]) -> bool:
        if not password_hash:
            bcrypt.checkpw(password.encode(), _DUMMY_HASH)
            return False
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            # stored hash is not a bcrypt hash
            return False

    async def _record_login(
        self, profile: Optional[Profile], ip_address: Optional[str], success: bool
    ) -> None:
        await self.audit.record(
            AuditEvent(
                firm_id=profile.firm_id if profile else None,
                user_id=profile.id if profile else None,
                event_type=AuditEventType.login.value,
                entity_type="profile",
                entity_id=str(profile.id) if profile else None,
                ip_address=ip_address,
                details={"success": success},
                lawful_basis=lawful_basis.AUTHENTICATION,
            )
        )
