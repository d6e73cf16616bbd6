"""
Pytest configuration and fixtures.
"""

from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.application.interfaces.repositories import (
    AppointmentRepositoryInterface,
    AvailabilityRepositoryInterface,
    RepairRequestRepositoryInterface,
    TechnicianRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.notification_dispatcher import NotificationDispatcher
from src.domain.value_objects.address import Address
from src.infrastructure.database.models import Base
from tests.factories import NOW, RecordingSender

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    """Fixed time source."""
    return lambda: NOW


@pytest.fixture
def sample_address():
    """Create a sample address for testing."""
    return Address(
        street="Av. Providencia 1234",
        city="Santiago",
        commune="Providencia",
        region="Metropolitana",
        postal_code="7500000",
    )


@pytest.fixture
def recording_sender():
    return RecordingSender()


@pytest.fixture
def notifier(recording_sender):
    return NotificationDispatcher(recording_sender)


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_repair_request_repository():
    """Mock repair request repository."""
    mock_repo = AsyncMock(spec=RepairRequestRepositoryInterface)
    mock_repo.create = AsyncMock(side_effect=lambda repair_request: repair_request)
    mock_repo.update = AsyncMock(side_effect=lambda repair_request: repair_request)
    return mock_repo


@pytest.fixture
def mock_technician_repository():
    """Mock technician directory."""
    return AsyncMock(spec=TechnicianRepositoryInterface)


@pytest.fixture
def mock_appointment_repository():
    """Mock appointment repository."""
    mock_repo = AsyncMock(spec=AppointmentRepositoryInterface)
    mock_repo.create = AsyncMock(side_effect=lambda appointment: appointment)
    mock_repo.update = AsyncMock(side_effect=lambda appointment: appointment)
    return mock_repo


@pytest.fixture
def mock_availability_repository():
    """Mock availability calendar; every slot is open by default."""
    mock_repo = AsyncMock(spec=AvailabilityRepositoryInterface)
    mock_repo.check_time_slot_availability = AsyncMock(return_value=True)
    mock_repo.book_slot = AsyncMock(return_value=True)
    mock_repo.release_slot = AsyncMock(return_value=None)
    return mock_repo


@pytest.fixture
def mock_transaction_service():
    """Transaction service that simply runs the operation."""

    async def run(operation):
        return await operation()

    mock_service = AsyncMock(spec=TransactionServiceInterface)
    mock_service.execute_in_transaction = AsyncMock(side_effect=run)
    return mock_service
