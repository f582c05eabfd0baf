"""Test configuration and fixtures."""

import os
from datetime import date, timedelta

# Point the application engine at SQLite before anything imports settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("FARE_SOURCE", "routes")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from cab_booking.core.database import Base, get_db  # noqa: E402
from cab_booking.models import *  # noqa: E402,F403 - Import all models
from cab_booking.schemas.route import RouteInfo  # noqa: E402
from cab_booking.services.route_service import RouteService  # noqa: E402

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create a test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_engine):
    """Create a test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def seeded_routes(test_session):
    """Routes table holding the popular routes with their seeded prices."""
    await RouteService(test_session).seed_popular_routes()
    return test_session


@pytest_asyncio.fixture(scope="function")
async def test_app(test_session):
    """Create a test FastAPI application."""
    from fastapi import FastAPI
    from fastapi.exceptions import RequestValidationError

    from cab_booking.core.exceptions import (
        ProblemDetailsException,
        generic_exception_handler,
        problem_details_handler,
        request_validation_handler,
    )
    from cab_booking.routers import booking, catalog, contact, health, metrics

    # Create a simplified test app without lifespan
    app = FastAPI(
        title="ZingCab Booking API (Test)",
        description="Test version of the API",
        version="1.0.0-test",
    )

    app.add_exception_handler(ProblemDetailsException, problem_details_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(health.router)
    app.include_router(contact.router)
    app.include_router(booking.router)
    app.include_router(catalog.router)
    app.include_router(metrics.router)

    # Override database dependency
    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def sample_contact_data():
    """Sample contact form data for testing."""
    return {
        "name": "Ananya Sen",
        "email": "ananya.sen@example.com",
        "phone": "9830012345",
        "subject": "Airport pickup",
        "message": "Do you have Innova Crysta available for an early morning pickup?"
    }


@pytest.fixture
def sample_booking_data(today):
    """Sample booking form data as the frontend sends it (camelCase)."""
    return {
        "name": "Rahul Das",
        "email": "rahul.das@example.com",
        "phone": "9876543210",
        "fromCity": "Kolkata",
        "toCity": "Digha",
        "date": (today + timedelta(days=3)).isoformat(),
        "returnDate": "",
        "pickupTime": "06:30",
        "carType": "sedan",
        "tripType": "oneway"
    }


@pytest.fixture
def digha_route():
    return RouteInfo(from_city="Kolkata", to_city="Digha", distance_km=185, sedan_price=2200, suv_price=3000)
