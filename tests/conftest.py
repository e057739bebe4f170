"""Pytest configuration and fixtures."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from transfer_scheduler.models import TransferRequest
from transfer_scheduler.repositories import InMemoryTransferRepository
from transfer_scheduler.service import TransferSchedulerService


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed reference date."""
    return date(2024, 6, 10)


@pytest.fixture
def source_account() -> str:
    """Sample source account number."""
    return "1111111111"


@pytest.fixture
def target_account() -> str:
    """Sample target account number."""
    return "2222222222"


@pytest.fixture
def valid_request(today: date, source_account: str, target_account: str) -> TransferRequest:
    """Request that passes validation, 15 days ahead."""
    return TransferRequest(
        source_account=source_account,
        target_account=target_account,
        amount=Decimal("100"),
        transfer_date=today + timedelta(days=15),
    )


@pytest.fixture
def repository(today: date) -> InMemoryTransferRepository:
    """In-memory repository pinned to the reference date."""
    return InMemoryTransferRepository(clock=lambda: today)


@pytest.fixture
def service(repository: InMemoryTransferRepository, today: date) -> TransferSchedulerService:
    """Service over the in-memory repository."""
    return TransferSchedulerService(repository, clock=lambda: today)
