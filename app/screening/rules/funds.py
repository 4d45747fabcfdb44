"""Available funds ceiling.

A single transfer may not exceed the account's available balance. The
balance is a fixed ceiling here; there is no settlement layer to ask.
"""

from decimal import Decimal
from typing import Optional

from app.models import BlockedInsufficientFunds

INSUFFICIENT_FUNDS_MESSAGE = "Insufficient funds"


def check_funds(
    amount: Decimal,
    limit: Decimal = Decimal("1000"),
) -> Optional[BlockedInsufficientFunds]:
    """Block transfers whose requested amount is above ``limit``."""
    if amount > limit:
        return BlockedInsufficientFunds(reason=INSUFFICIENT_FUNDS_MESSAGE)
    return None
