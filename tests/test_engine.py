"""Tests for the compliance rule chain."""

from decimal import Decimal

import pytest

from app.models import Currency, RiskTier, RulesConfig, VelocityState
from app.screening.engine import ComplianceEngine
from tests.conftest import NOW, busy_velocity, make_request, ms


def evaluate(engine, request, velocity=None, now=NOW, converted=None):
    converted = converted if converted is not None else Decimal(request.amount)
    return engine.evaluate(request, converted, velocity or VelocityState(), now)


class TestComplianceEngine:
    def test_clean_transfer_approved(self, engine):
        decision = evaluate(engine, make_request(amount="500"), converted=Decimal("450.00"))
        assert decision.outcome == "APPROVED"
        assert decision.amount == Decimal("450.00")
        assert decision.currency == Currency.EUR
        assert decision.transaction_id

    def test_restricted_currency_blocked(self, engine):
        decision = evaluate(engine, make_request(target=Currency.RESTRICTED))
        assert decision.outcome == "BLOCKED_COMPLIANCE"
        assert decision.reason == "Transactions involving restricted currencies are not allowed"

    def test_high_risk_ceiling_blocked(self, engine):
        decision = evaluate(engine, make_request(amount="50000", tier=RiskTier.HIGH))
        assert decision.outcome == "BLOCKED_RISK"
        assert decision.risk_warning == "Transaction exceeds allowed limit for high-risk countries"
        assert decision.compliance_message == "Transaction blocked due to compliance policy"

    def test_suspicious_velocity_blocked(self, engine):
        decision = evaluate(
            engine, make_request(amount="100"),
            velocity=busy_velocity(3), now=NOW + ms(2000),
        )
        assert decision.outcome == "BLOCKED_SUSPICIOUS"
        assert decision.reason == "Suspicious activity detected. Please verify your identity."

    def test_funds_ceiling_blocked(self, engine):
        decision = evaluate(engine, make_request(amount="1500"))
        assert decision.outcome == "BLOCKED_INSUFFICIENT_FUNDS"
        assert decision.reason == "Insufficient funds"

    def test_funds_limit_inclusive(self, engine):
        assert evaluate(engine, make_request(amount="1000")).outcome == "APPROVED"


class TestRuleOrder:
    def test_restricted_currency_preempts_everything(self, engine):
        """Restricted target, high-risk country, huge amount, busy account."""
        request = make_request(
            amount="50000", target=Currency.RESTRICTED, tier=RiskTier.HIGH,
        )
        decision = evaluate(
            engine, request, velocity=busy_velocity(5), now=NOW + ms(10),
        )
        assert decision.outcome == "BLOCKED_COMPLIANCE"
        assert decision.reason == "Transactions involving restricted currencies are not allowed"
        assert not hasattr(decision, "risk_warning")

    def test_risk_preempts_velocity_and_funds(self, engine):
        decision = evaluate(
            engine, make_request(amount="20000", tier=RiskTier.HIGH),
            velocity=busy_velocity(3), now=NOW + ms(10),
        )
        assert decision.outcome == "BLOCKED_RISK"

    def test_velocity_preempts_funds(self, engine):
        decision = evaluate(
            engine, make_request(amount="1500"),
            velocity=busy_velocity(3), now=NOW + ms(10),
        )
        assert decision.outcome == "BLOCKED_SUSPICIOUS"

    def test_after_gap_falls_through_to_funds(self, engine):
        decision = evaluate(
            engine, make_request(amount="1500"),
            velocity=busy_velocity(3), now=NOW + ms(5001),
        )
        assert decision.outcome == "BLOCKED_INSUFFICIENT_FUNDS"

    def test_high_risk_under_ceiling_reaches_funds(self, engine):
        decision = evaluate(engine, make_request(amount="5000", tier=RiskTier.HIGH))
        assert decision.outcome == "BLOCKED_INSUFFICIENT_FUNDS"


class TestRequestedAmountComparisons:
    def test_funds_uses_requested_not_converted(self, engine):
        """1100 USD converts to 990 EUR but the requested 1100 is over the limit."""
        decision = evaluate(engine, make_request(amount="1100"), converted=Decimal("990.00"))
        assert decision.outcome == "BLOCKED_INSUFFICIENT_FUNDS"

    def test_risk_uses_requested_not_converted(self, engine):
        decision = evaluate(
            engine, make_request(amount="11000", tier=RiskTier.HIGH),
            converted=Decimal("9900.00"),
        )
        assert decision.outcome == "BLOCKED_RISK"


class TestConfigurableThresholds:
    def test_custom_config(self):
        engine = ComplianceEngine(config=RulesConfig(
            restricted_currencies=[Currency.GBP],
            funds_limit=Decimal("100"),
        ))
        assert evaluate(engine, make_request(target=Currency.GBP)).outcome == "BLOCKED_COMPLIANCE"
        assert evaluate(engine, make_request(amount="150")).outcome == "BLOCKED_INSUFFICIENT_FUNDS"
        assert evaluate(
            engine, make_request(target=Currency.RESTRICTED, amount="50"),
        ).outcome == "APPROVED"

    def test_config_swap_takes_effect(self, engine):
        engine.config = RulesConfig(funds_limit=Decimal("5000"))
        assert evaluate(engine, make_request(amount="1500")).outcome == "APPROVED"


def test_unparsable_amount_is_a_caller_error(engine):
    with pytest.raises(ValueError):
        engine.evaluate(make_request(amount="abc"), Decimal("0"), VelocityState(), NOW)
