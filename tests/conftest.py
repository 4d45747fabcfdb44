"""Shared fixtures for the test suite."""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from app.identity.provider import IdentityProvider
from app.main import app
from app.models import (
    Account,
    Currency,
    RiskTier,
    RulesConfig,
    TransferRequest,
    VerificationStatus,
    VelocityState,
)
from app.screening.converter import DEFAULT_RATES
from app.screening.engine import ComplianceEngine
from app.screening.orchestrator import TransferOrchestrator
from app.storage.memory import MemoryStore


NOW = datetime(2026, 2, 22, 10, 0, tzinfo=timezone.utc)

STRONG_PASSWORD = "SecurePassword123!"


@pytest.fixture
def config():
    return RulesConfig()


@pytest.fixture
def rates():
    return dict(DEFAULT_RATES)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def engine(config):
    return ComplianceEngine(config=config)


@pytest.fixture
def orchestrator(engine, rates, store):
    return TransferOrchestrator(engine=engine, rates=rates, store=store)


@pytest.fixture
def provider():
    return IdentityProvider()


@pytest.fixture
def verified_account():
    return make_account(status=VerificationStatus.VERIFIED)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def make_request(
    amount="500",
    source=Currency.USD,
    target=Currency.EUR,
    tier=RiskTier.LOW,
) -> TransferRequest:
    return TransferRequest(
        source_currency=source,
        target_currency=target,
        amount=amount,
        recipient_country_risk_tier=tier,
    )


def make_account(
    account_id="acct-1",
    status=VerificationStatus.UNREGISTERED,
    velocity=None,
) -> Account:
    return Account(
        account_id=account_id,
        verification_status=status,
        velocity=velocity or VelocityState(),
    )


def busy_velocity(count=3, last_at=NOW) -> VelocityState:
    """Velocity state of an account that already has ``count`` approvals."""
    return VelocityState(transaction_count=count, last_transaction_at=last_at)


def ms(milliseconds: int) -> timedelta:
    return timedelta(milliseconds=milliseconds)
