import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from lexintake.adapter.services.counter_store import MemoryCounterStore
from lexintake.adapter.services.unit_of_work import SessionFactoryUnitOfWork, SqlAlchemyUnitOfWork
from lexintake.api.app import create_app
from lexintake.app.services.aml_provider import DisabledAMLProvider
from lexintake.app.services.email_sender import NullEmailSender
from lexintake.app.services.rate_limiter import RateLimiter
from lexintake.depends import (
    get_aml_provider,
    get_email_sender,
    get_rate_limiter,
    get_unit_of_work,
    get_unit_of_work_factory,
)
from tests.utils.api_client import signin, signup


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_session, session_factory):
    app = create_app(ApplicationConfig)
    rate_limiter = RateLimiter(MemoryCounterStore())

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_unit_of_work_factory] = lambda: (
        lambda: SessionFactoryUnitOfWork(session_factory)
    )
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    app.dependency_overrides[get_aml_provider] = lambda: DisabledAMLProvider()
    app.dependency_overrides[get_email_sender] = lambda: NullEmailSender()
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def owner(client):
    """A signed-up firm owner, signed in on `client`."""
    created = await signup(client, "owner@smithlaw.com")
    cookies = await signin(client, "owner@smithlaw.com")
    return {**created, "email": "owner@smithlaw.com", "cookies": cookies}
