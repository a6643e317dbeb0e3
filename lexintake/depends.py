from typing import Callable, Optional
from uuid import UUID

from fastapi import Cookie, Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from lexintake.adapter.services.aml_provider_client import HttpAMLProvider
from lexintake.adapter.services.counter_store import MemoryCounterStore, RedisCounterStore
from lexintake.adapter.services.mailgun_email_sender import MailgunEmailSender
from lexintake.adapter.services.unit_of_work import SessionFactoryUnitOfWork, SqlAlchemyUnitOfWork
from lexintake.api.error import raise_for_error
from lexintake.api.utils.jwt import verify_session_token
from lexintake.api.utils.request_context import client_ip
from lexintake.app.services.aml_provider import DisabledAMLProvider, IAMLProvider
from lexintake.app.services.email_sender import IEmailSender, NullEmailSender
from lexintake.app.services.rate_limiter import RateLimiter, build_policies
from lexintake.app.services.unit_of_work import UnitOfWork
from lexintake.app.use_cases.auth import ResolveSessionUseCase
from lexintake.app.use_cases.caller import Caller

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_unit_of_work_factory() -> Callable[[], UnitOfWork]:
    """Fresh-session units of work, for fanning reads out with asyncio.gather."""
    return lambda: SessionFactoryUnitOfWork(AsyncSessionLocal)


def _build_rate_limiter() -> RateLimiter:
    if ApplicationConfig.RATE_LIMIT_BACKEND == "redis":
        store = RedisCounterStore(ApplicationConfig.REDIS_URL)
    else:
        store = MemoryCounterStore()
    return RateLimiter(
        store,
        policies=build_policies(ApplicationConfig.RATE_LIMITS),
        enabled=ApplicationConfig.RATE_LIMIT_ENABLED,
    )


_rate_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = _build_rate_limiter()
    return _rate_limiter


def get_aml_provider() -> IAMLProvider:
    if not ApplicationConfig.AML_ENABLED:
        return DisabledAMLProvider()
    return HttpAMLProvider(
        base_url=ApplicationConfig.AML_API_URL,
        api_key=ApplicationConfig.AML_API_KEY,
        timeout=ApplicationConfig.AML_API_TIMEOUT,
    )


def get_email_sender() -> IEmailSender:
    if not (ApplicationConfig.MAILGUN_API_KEY and ApplicationConfig.MAILGUN_DOMAIN):
        return NullEmailSender()
    return MailgunEmailSender(
        api_key=ApplicationConfig.MAILGUN_API_KEY,
        domain=ApplicationConfig.MAILGUN_DOMAIN,
        from_email=ApplicationConfig.MAILGUN_FROM_EMAIL,
        app_url=ApplicationConfig.APP_URL,
    )


def _parse_uuid(value: Optional[str]) -> Optional[UUID]:
    if not value:
        return None
    try:
        return UUID(value)
    except ValueError:
        return None


async def get_current_session(
    request: Request,
    session_token: Optional[str] = Cookie(None),
    firm_id: Optional[str] = Cookie(None),
    user_id: Optional[str] = Cookie(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> Caller:
    """
    Dependency resolving the dashboard session cookies to a Caller.

    The signed session_token names a server-side session row; firm_id and
    user_id cookies, when present, must agree with it.

    Raises:
        ClientError: 401 if the session is missing, invalid, revoked or expired
    """
    payload = verify_session_token(session_token) if session_token else None
    session_id = _parse_uuid(payload.get("sid")) if payload else None

    result = await ResolveSessionUseCase(uow).execute(
        session_id, firm_id=_parse_uuid(firm_id), user_id=_parse_uuid(user_id)
    )
    if result.is_err():
        raise_for_error(result.error)

    context = result.value
    return Caller(
        firm_id=context.firm_id,
        session_id=context.session_id,
        user_id=context.user_id,
        role=context.role,
        ip_address=client_ip(request),
    )
