"""Tests for the velocity tracker and the rapid-fire rule."""

from app.models import VelocityState
from app.screening.rules.velocity import SUSPICIOUS_ACTIVITY_MESSAGE, check_velocity
from app.screening.velocity import is_suspicious, record_transaction
from tests.conftest import NOW, busy_velocity, ms


class TestIsSuspicious:
    def test_fresh_state_not_suspicious(self):
        assert not is_suspicious(VelocityState(), NOW)

    def test_three_recent_transactions_suspicious(self):
        assert is_suspicious(busy_velocity(3), NOW + ms(4999))

    def test_two_recent_transactions_not_suspicious(self):
        assert not is_suspicious(busy_velocity(2), NOW + ms(100))

    def test_exactly_window_not_suspicious(self):
        """The gap must be strictly under 5000ms."""
        assert not is_suspicious(busy_velocity(3), NOW + ms(5000))

    def test_gap_over_window_not_suspicious(self):
        assert not is_suspicious(busy_velocity(3), NOW + ms(5001))

    def test_counter_never_decays(self):
        """A long-lived account with many approvals is still gated by the gap."""
        assert is_suspicious(busy_velocity(250), NOW + ms(10))

    def test_custom_window_and_count(self):
        state = busy_velocity(1)
        assert is_suspicious(state, NOW + ms(9000), window_ms=10000, min_count=1)
        assert not is_suspicious(state, NOW + ms(9000), window_ms=5000, min_count=1)


class TestRecordTransaction:
    def test_increments_and_stamps(self):
        state = record_transaction(VelocityState(), NOW)
        assert state.transaction_count == 1
        assert state.last_transaction_at == NOW

    def test_returns_new_state(self):
        original = busy_velocity(3)
        updated = record_transaction(original, NOW + ms(10))
        assert original.transaction_count == 3
        assert original.last_transaction_at == NOW
        assert updated.transaction_count == 4
        assert updated.last_transaction_at == NOW + ms(10)


class TestCheckVelocity:
    def test_fires_with_message(self):
        decision = check_velocity(busy_velocity(3), NOW + ms(1000))
        assert decision.outcome == "BLOCKED_SUSPICIOUS"
        assert decision.reason == SUSPICIOUS_ACTIVITY_MESSAGE
        assert decision.reason == "Suspicious activity detected. Please verify your identity."

    def test_passes(self):
        assert check_velocity(busy_velocity(3), NOW + ms(6000)) is None
