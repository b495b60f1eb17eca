"""
Pytest configuration and fixtures
"""

import random

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from impostor.core.database import Base, get_db
from impostor.main import app
from impostor.models import Room, Player  # noqa: F401 - registers the tables
from impostor.schemas.room import RoomCreate, RoomSettings, PredefinedTheme
from impostor.services.room_lifecycle import RoomLifecycle
from impostor.services.room_locks import RoomLockManager


# Test database URL (in-memory SQLite for fast testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    """Create test database session"""
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def rng():
    """Seeded generator so failures reproduce"""
    return random.Random(20240601)


@pytest.fixture
def lifecycle(db_session, rng):
    """Lifecycle service with its own lock manager"""
    return RoomLifecycle(db_session, rng=rng, locks=RoomLockManager(timeout=1.0, use_redis=False))


@pytest.fixture
def room_factory(lifecycle):
    """Create a room with a host and some guests; returns (room_id, host_id, guest_ids)"""
    async def _create(guests=2, ready=True, impostor_count=1, theme=None,
                      max_players=10, is_private=False, name="Test Room"):
        seat = await lifecycle.create_room(RoomCreate(
            name=name,
            player_name="Host",
            settings=RoomSettings(
                max_players=max_players,
                impostor_count=impostor_count,
                is_private=is_private,
                theme=theme or PredefinedTheme(value="Famous Movies"),
            ),
        ))
        room_id = seat.room.id
        guest_ids = []
        for i in range(guests):
            joined = await lifecycle.join_room(room_id, f"Guest {i + 1}")
            guest_ids.append(joined.player_id)
            if ready:
                await lifecycle.set_ready(room_id, joined.player_id, True)
        return room_id, seat.player_id, guest_ids

    return _create


@pytest.fixture
def override_get_db(db_session):
    """Override database dependency for testing"""
    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_get_db):
    """HTTP client bound to the app"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
