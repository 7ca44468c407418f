"""Service test fixtures — async DB, seeded accounts, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys ON
    - get_db dependency overridden to use the test DB
    - make_account inserts Identity Store rows directly (the identity subsystem
      is outside this service)
"""

import itertools

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from linkbook.db.base import Base
from linkbook.infrastructure.database import enable_sqlite_foreign_keys, get_db
from linkbook.models.account import Account
from linkbook.models.contact_link import ContactLink
from linkbook.main import app

_email_counter = itertools.count(1)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_account(test_db):
    """Factory: insert an account. Email defaults to a unique address."""
    async def _make(name: str = "Some Person", email: str | None = None) -> Account:
        if email is None:
            email = f"person{next(_email_counter)}@example.com"
        account = Account(name=name, email=email, password_hash="x")
        test_db.add(account)
        await test_db.commit()
        return account
    return _make


@pytest.fixture
def make_link(test_db):
    """Factory: insert a contact link directly, bypassing the service guards."""
    async def _make(owner: Account, person: Account) -> ContactLink:
        link = ContactLink(owner_id=owner.id, person_id=person.id)
        test_db.add(link)
        await test_db.commit()
        return link
    return _make


@pytest.fixture
def as_actor():
    """Headers the auth gateway would set for this account."""
    def _headers(account: Account) -> dict[str, str]:
        return {"X-Account-Id": str(account.id)}
    return _headers
