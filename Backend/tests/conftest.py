"""
Pytest configuration and fixtures.

Store tests run against an in-memory SQLite database created per test;
API tests run the FastAPI app through httpx with the contact store and the
"today" clock overridden.
"""
import os

# Keep the app's module-level engine off the on-disk default database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ridebook.contact_store import InMemoryContactStore
from ridebook.core.db import init_db

TODAY = date(2026, 10, 19)


def booking_payload(**overrides) -> dict:
    """A complete, valid booking for a new customer in wire (camelCase) format."""
    payload = {
        "serviceType": "one-way",
        "pickupDate": TODAY.isoformat(),
        "pickupTime": "10:00",
        "pickupLocationType": "airport",
        "pickupLocation": {"address": "JFK", "lat": 40.6413, "lng": -73.7781},
        "stops": [],
        "dropoffLocationType": "location",
        "dropoffLocation": {"address": "123 Main St", "lat": 40.7128, "lng": -74.006},
        "phone": "774-415-3244",
        "phoneRecognized": False,
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "passengers": 1,
    }
    payload.update(overrides)
    return payload


@pytest.fixture(scope="function")
async def async_engine():
    """
    In-memory SQLite engine with the contacts schema.

    StaticPool keeps the single in-memory connection alive for the whole test.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture(scope="function")
async def async_session(async_engine):
    session_maker = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture
def memory_store() -> InMemoryContactStore:
    return InMemoryContactStore()


@pytest.fixture(scope="function")
async def client(memory_store):
    """AsyncClient against the app, backed by the in-memory contact store."""
    # Import here so DATABASE_URL above is set first
    from ridebook.main import app
    from ridebook.routes import get_contact_store, get_local_today

    app.dependency_overrides[get_contact_store] = lambda: memory_store
    app.dependency_overrides[get_local_today] = lambda: TODAY

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def sql_client(async_session):
    """AsyncClient against the app, backed by the SQL store on the test session."""
    from ridebook.core.db import get_session
    from ridebook.main import app
    from ridebook.routes import get_local_today

    async def override_get_session():
        yield async_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_local_today] = lambda: TODAY

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
