"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from chari_stub.api import create_app
from chari_stub.config import ChariStubConfig, FixtureConfig
from chari_stub.models import Transaction, TransactionStatus, TransactionType
from chari_stub.store import FixtureStore

API_KEY = "chari_api_key_123"


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def fixture_config(seed: int) -> FixtureConfig:
    """Reference fixtures with a 25-item history and no extra customers."""
    return FixtureConfig(seed=seed, transactions_per_customer=25, extra_customers=0)


@pytest.fixture
def store(fixture_config: FixtureConfig) -> FixtureStore:
    """Create a fresh seeded store for each test."""
    return FixtureStore.seeded(fixture_config)


@pytest.fixture
def client(store: FixtureStore, fixture_config: FixtureConfig) -> TestClient:
    """Authenticated client over a fresh app."""
    app = create_app(ChariStubConfig(fixtures=fixture_config), store)
    return TestClient(app, headers={"x-api-key": API_KEY}, raise_server_exceptions=False)


@pytest.fixture
def active_phone() -> str:
    """Active reference customer with PIN 1234."""
    return "+212600000004"


@pytest.fixture
def transfer_out() -> Transaction:
    """Outgoing transfer naming its recipient."""
    return Transaction(
        id="TXN_003",
        type=TransactionType.TRANSFER_OUT,
        amount=Decimal("-150.00"),
        currency="MAD",
        date=datetime(2024, 1, 24, 16, 45, tzinfo=timezone.utc),
        description="Transfer to +212611111111",
        status=TransactionStatus.COMPLETED,
        balance_after=Decimal("2047.50"),
    )
