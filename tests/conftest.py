"""Test configuration and fixtures"""

import os

# Keep the application engine off Postgres while tests import the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from uuid import uuid4

from app.main import app
from app.database import Base, get_db
from app.models.restaurant import Restaurant, Table
from app.schemas.auth import Session
from app.api.auth import create_session_token


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_restaurant(test_db):
    """Create a test restaurant"""
    restaurant = Restaurant(id=uuid4(), name="Test Restaurant")
    test_db.add(restaurant)
    await test_db.commit()

    return restaurant


@pytest.fixture
async def test_table(test_db, test_restaurant):
    """Four seat table open tomorrow"""
    table = Table(
        id=uuid4(),
        restaurant_id=test_restaurant.id,
        name="T1",
        num_seats_available=4,
        num_seats_reserved=0,
        start_date=datetime.now(timezone.utc) + timedelta(days=1),
    )
    test_db.add(table)
    await test_db.commit()

    return table


@pytest.fixture
async def second_table(test_db, test_restaurant):
    """Two seat table open tomorrow"""
    table = Table(
        id=uuid4(),
        restaurant_id=test_restaurant.id,
        name="T2",
        num_seats_available=2,
        num_seats_reserved=0,
        start_date=datetime.now(timezone.utc) + timedelta(days=1),
    )
    test_db.add(table)
    await test_db.commit()

    return table


@pytest.fixture
async def past_table(test_db, test_restaurant):
    """Table whose date has already passed"""
    table = Table(
        id=uuid4(),
        restaurant_id=test_restaurant.id,
        name="Yesterday",
        num_seats_available=4,
        num_seats_reserved=0,
        start_date=datetime.now(timezone.utc) - timedelta(days=1),
    )
    test_db.add(table)
    await test_db.commit()

    return table


@pytest.fixture
def test_session():
    """Session of a guest profile"""
    return Session(
        account_id=uuid4(),
        profile_id=uuid4(),
        email="guest@example.com",
    )


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(client, test_session):
    """Create authenticated test client"""
    token = create_session_token(test_session)
    client.headers["Authorization"] = f"Bearer {token}"

    return client
