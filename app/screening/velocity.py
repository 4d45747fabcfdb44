"""Velocity tracking over an explicit per-account state.

Both operations are pure: they take the current state and the caller's
notion of "now" and never read a clock themselves. The counter is never
reset, so once an account has three approved transfers the time gap is
the only thing standing between it and a suspicious-activity block.
"""

from datetime import datetime, timedelta

from app.models import VelocityState

DEFAULT_WINDOW_MS = 5000
DEFAULT_MIN_COUNT = 3


def is_suspicious(
    state: VelocityState,
    now: datetime,
    window_ms: int = DEFAULT_WINDOW_MS,
    min_count: int = DEFAULT_MIN_COUNT,
) -> bool:
    """True when the last transfer was under ``window_ms`` ago and at least
    ``min_count`` transfers have been approved."""
    if state.last_transaction_at is None:
        return False
    elapsed = now - state.last_transaction_at
    return elapsed < timedelta(milliseconds=window_ms) and (
        state.transaction_count >= min_count
    )


def record_transaction(state: VelocityState, now: datetime) -> VelocityState:
    """Return the state after one more approved transfer at ``now``."""
    return VelocityState(
        transaction_count=state.transaction_count + 1,
        last_transaction_at=now,
    )
