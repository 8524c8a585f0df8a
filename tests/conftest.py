"""
Test Configuration
==================

Pytest fixtures for Warranty Tracker tests.
"""

import os
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["LEDGER_MODE"] = "mock"
os.environ["CLOCK_MODE"] = "fixed"

from services.warranty.registry import WarrantyRegistry  # noqa: E402
from shared.ledger import InMemoryLedgerStorage, MockClock  # noqa: E402


# 2024-01-01T00:00:00Z
BASE_TIMESTAMP = 1704067200
DAY = 86400
YEAR = 31536000


@pytest.fixture
def storage() -> InMemoryLedgerStorage:
    """Fresh in-memory ledger for each test."""
    return InMemoryLedgerStorage(namespace="test")


@pytest.fixture
def clock() -> MockClock:
    """Clock one day after the base timestamp."""
    return MockClock(BASE_TIMESTAMP + DAY)


@pytest.fixture
def registry(storage: InMemoryLedgerStorage, clock: MockClock) -> WarrantyRegistry:
    """Registry over isolated storage and a settable clock."""
    return WarrantyRegistry(storage, clock)


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Build bearer headers for a caller address."""
    from shared.auth import create_access_token

    def _headers(address: str) -> dict[str, str]:
        token = create_access_token({"sub": address})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def warranty_client(registry: WarrantyRegistry) -> AsyncGenerator[AsyncClient, None]:
    """Test client for the warranty service, bound to the test registry."""
    from services.warranty.dependencies import get_registry
    from services.warranty.main import app

    app.dependency_overrides[get_registry] = lambda: registry
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()
