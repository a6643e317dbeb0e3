from typing import Optional

import bcrypt

from lexintake.app.services.audit_recorder import AuditRecorder
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.domain import lawful_basis
from lexintake.domain.entities import AuditEvent, AuditEventType, Firm, Profile, ProfileRole
from lexintake.domain.errors import ErrorCode
from lexintake.libs.result import Error, Result, Return

from .dtos import SignupCommand, SignupResponse


class SignupUseCase:
    """
    Signup Use Case

    Business Logic:
    1. Normalise email to lower case
    2. Reject if a profile with that email exists
    3. Hash password with bcrypt cost factor 12
    4. Create Firm and its firm_owner Profile atomically
    5. Audit the registration after commit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow
        self.audit = AuditRecorder(uow)

    async def execute(self, command: SignupCommand, ip_address: Optional[str] = None) -> Result[SignupResponse]:
        email = command.email.strip().lower()

        async with self.uow:
            existing = await self.uow.profiles.get_by_email(email)
            if existing:
                return Return.err(
                    Error(ErrorCode.EMAIL_ALREADY_EXISTS, "Email already registered")
                )

            password_hash = bcrypt.hashpw(command.password.encode("utf-8"), bcrypt.gensalt(12))

            firm = await self.uow.firms.create(
                Firm(name=command.firm_name, jurisdiction=command.jurisdiction)
            )
            profile = await self.uow.profiles.create(
                Profile(
                    email=email,
                    password_hash=password_hash.decode("utf-8"),
                    firm_id=firm.id,
                    role=ProfileRole.firm_owner,
                )
            )
            await self.uow.commit()
            response = SignupResponse(firm_id=firm.id, user_id=profile.id)

            await self.audit.record(
                AuditEvent(
                    firm_id=response.firm_id,
                    user_id=response.user_id,
                    event_type=AuditEventType.create.value,
                    entity_type="profile",
                    entity_id=str(response.user_id),
                    ip_address=ip_address,
                    details={"email": email, "firm_name": command.firm_name},
                    lawful_basis=lawful_basis.ACCOUNT_REGISTRATION,
                )
            )

            return Return.ok(response)
