"""Rapid-fire transaction rule.

Flags an account that already has several approved transfers and tries
another one within a few seconds of the last. Legitimate senders rarely
submit back-to-back payments, so the account is asked to re-verify.
"""

from datetime import datetime
from typing import Optional

from app.models import BlockedSuspicious, VelocityState
from app.screening.velocity import DEFAULT_MIN_COUNT, DEFAULT_WINDOW_MS, is_suspicious

SUSPICIOUS_ACTIVITY_MESSAGE = "Suspicious activity detected. Please verify your identity."


def check_velocity(
    state: VelocityState,
    now: datetime,
    window_ms: int = DEFAULT_WINDOW_MS,
    min_count: int = DEFAULT_MIN_COUNT,
) -> Optional[BlockedSuspicious]:
    """Block the transfer if the account's velocity state looks suspicious."""
    if is_suspicious(state, now, window_ms=window_ms, min_count=min_count):
        return BlockedSuspicious(reason=SUSPICIOUS_ACTIVITY_MESSAGE)
    return None
