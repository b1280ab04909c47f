"""Test configuration and fixtures."""

from datetime import datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from airport_booking.core.database import Base
from airport_booking.core.dependencies import ServiceContainer
from airport_booking.models import *  # noqa: F403 - Import all models
from airport_booking.repositories.memory import (
    InMemoryBookingRepository,
    InMemoryFlightRepository,
    InMemoryPassengerRepository,
)
from airport_booking.schemas.flight import CreateFlightRequest

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

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop tables
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


@pytest.fixture
def container():
    """Service container with its own lock pools."""
    return ServiceContainer(lock_stripes=8)


@pytest.fixture
def flight_repository():
    return InMemoryFlightRepository()


@pytest.fixture
def passenger_repository():
    return InMemoryPassengerRepository()


@pytest.fixture
def booking_repository():
    return InMemoryBookingRepository()


@pytest.fixture
def services(container, flight_repository, passenger_repository, booking_repository):
    """Services wired over in-memory repositories."""
    return container.build(flight_repository, passenger_repository, booking_repository)


@pytest.fixture
def sql_services(container, test_session):
    """Services wired over SQLAlchemy repositories on the test session."""
    return container.for_session(test_session)


@pytest.fixture
def sample_flight_data():
    """Sample flight data for testing."""
    return {
        "flight_id": "F1",
        "flight_number": "XY123",
        "departure_country": "Palestine",
        "destination_country": "Jordan",
        "departure_airport": "Ramon",
        "arrival_airport": "Queen Alia",
        "departure_date": datetime(2025, 1, 1, 14, 0),
        "base_price": Decimal("100.00"),
        "available_seats": 10,
    }


@pytest.fixture
def sample_passenger_data():
    """Sample passenger data for testing."""
    return {
        "email": "test@mail.com",
        "first_name": "Mays",
        "phone": "0599999999",
    }


@pytest_asyncio.fixture
async def sample_flight(services, sample_flight_data):
    """Flight F1: base price 100, 10 seats, in the in-memory inventory."""
    return await services.inventory.add_flight(CreateFlightRequest(**sample_flight_data))


@pytest_asyncio.fixture
async def sample_passenger(services, sample_passenger_data):
    """A registered passenger in the in-memory directory."""
    return await services.passengers.register(**sample_passenger_data)
