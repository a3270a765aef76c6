"""Pytest configuration and fixtures."""

import os
import random
from datetime import timedelta
from typing import AsyncGenerator

# In-memory SQLite by default; point TEST_DATABASE_URL at PostgreSQL to test against it
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from smart_parking.api.deps import get_rng
from smart_parking.db.base import Base
from smart_parking.db.session import get_db
from smart_parking.main import app
from smart_parking.security import Role, create_access_token


class FixedRandom(random.Random):
    """Random source with a constant roll and a fixed choice index."""

    def __init__(self, roll: float, pick: int = 0):
        super().__init__(0)
        self.roll = roll
        self.pick = pick

    def random(self):
        return self.roll

    def choice(self, seq):
        return seq[self.pick]


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a clean database session for each test."""
    engine_kwargs = {}
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine_kwargs = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    test_engine = create_async_engine(TEST_DATABASE_URL, **engine_kwargs)

    # Create tables
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    TestSessionLocal = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    # Create session
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    await test_engine.dispose()


@pytest.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict:
    token = create_access_token("admin@smartpark.com", Role.ADMIN)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers() -> dict:
    token = create_access_token("john@example.com", Role.USER)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def expired_headers() -> dict:
    token = create_access_token("admin@smartpark.com", Role.ADMIN, expires_delta=timedelta(minutes=-5))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def fixed_rng():
    """Install a FixedRandom for the simulation endpoint."""

    def install(roll: float, pick: int = 0) -> FixedRandom:
        rng = FixedRandom(roll, pick)
        app.dependency_overrides[get_rng] = lambda: rng
        return rng

    return install


@pytest.fixture
def create_lot(async_client: AsyncClient, admin_headers: dict):
    """Create a lot through the API and return its JSON data."""

    async def _create(**fields) -> dict:
        body = {
            "name": "Mall A - Floor 1",
            "location": "Ground Floor, Mall A",
            "totalCapacity": 15,
            "description": "Main parking area on ground floor",
        }
        body.update(fields)
        response = await async_client.post("/api/v1/lots/", json=body, headers=admin_headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
