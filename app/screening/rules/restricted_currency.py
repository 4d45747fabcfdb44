"""Restricted currency rule.

Transfers into a restricted currency are refused outright, whatever the
amount or destination. This check runs first so a restricted-currency
transfer is never reported as a softer risk, fraud or funds problem.
"""

from typing import Iterable, Optional

from app.models import BlockedCompliance, Currency

RESTRICTED_CURRENCY_MESSAGE = (
    "Transactions involving restricted currencies are not allowed"
)


def check_restricted_currency(
    target_currency: Currency,
    restricted_currencies: Iterable[Currency],
) -> Optional[BlockedCompliance]:
    """Block the transfer if its target currency is restricted."""
    if target_currency in set(restricted_currencies):
        return BlockedCompliance(reason=RESTRICTED_CURRENCY_MESSAGE)
    return None
