"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use test DB session
    - db_manager patched so readiness probes see the test engine
    - Two users (alice, bob) seeded for isolation checks

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.auth import create_access_token
from app.infrastructure.database import (
    get_db, DatabaseSessionManager, enable_sqlite_foreign_keys,
)
from app.models.user import User
import app.infrastructure.database as db_module
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _seed_user(db, name: str, profile_image: str | None) -> User:
    user = User(name=name, profile_image=profile_image)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest.fixture
async def alice(test_db):
    return await _seed_user(test_db, "Alice", "pic.png")


@pytest.fixture
async def bob(test_db):
    return await _seed_user(test_db, "Bob", "bob.png")


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def alice_headers(alice):
    return bearer(alice)


@pytest.fixture
def bob_headers(bob):
    return bearer(bob)


@pytest.fixture
def project_payload():
    return {
        "title": "Launch site",
        "start_date": "2026-01-01",
        "end_date": "2099-12-31",
        "team_members": "Bob",
        "member_profile": "bob.png",
    }
