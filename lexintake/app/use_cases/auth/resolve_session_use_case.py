from typing import Optional
from uuid import UUID

from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.domain.base import utc_now
from lexintake.domain.entities import ProfileRole
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import SessionContext


class ResolveSessionUseCase:
    """
    Turns a session id (from the signed session_token cookie) into the caller's
    firm, profile and role.

    Business Rules:
    - Session must exist, not be revoked and not be expired
    - The profile must still exist and belong to the session's firm
    - Cookie-supplied firm_id/user_id must agree with the session when present
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        session_id: Optional[UUID],
        firm_id: Optional[UUID] = None,
        user_id: Optional[UUID] = None,
    ) -> Result[SessionContext]:
        if session_id is None:
            return Return.err(Error(ErrorCode.MISSING_CREDENTIAL, "Unauthorized"))

        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None or session.revoked or session.expires_at <= utc_now():
                return Return.err(Error(ErrorCode.INVALID_CREDENTIAL, "Unauthorized"))

            if (firm_id is not None and firm_id != session.firm_id) or (
                user_id is not None and user_id != session.profile_id
            ):
                return Return.err(Error(ErrorCode.INVALID_CREDENTIAL, "Unauthorized"))

            profile = await self.uow.profiles.get_by_id(session.profile_id)
            if profile is None or profile.firm_id != session.firm_id:
                return Return.err(Error(ErrorCode.INVALID_CREDENTIAL, "Unauthorized"))

            return Return.ok(
                SessionContext(
                    session_id=session.id,
                    firm_id=session.firm_id,
                    user_id=profile.id,
                    role=ProfileRole(profile.role).value,
                )
            )
