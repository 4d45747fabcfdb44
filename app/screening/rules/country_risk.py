"""High-risk country ceiling.

Transfers to recipients in a high-risk country are capped. Breaching the
cap produces two separate messages: a risk warning describing the limit
and a compliance notice that the transfer was blocked. Consumers display
them independently, so they are never merged into one string.

The comparison uses the amount as requested, before conversion: limits
are denominated in the sending account's reference unit.
"""

from decimal import Decimal
from typing import Optional

from app.models import BlockedRisk, RiskTier

HIGH_RISK_LIMIT_WARNING = "Transaction exceeds allowed limit for high-risk countries"
COMPLIANCE_BLOCK_MESSAGE = "Transaction blocked due to compliance policy"


def check_country_risk(
    risk_tier: RiskTier,
    amount: Decimal,
    limit: Decimal = Decimal("10000"),
) -> Optional[BlockedRisk]:
    """Block transfers above ``limit`` to high-risk countries."""
    if risk_tier == RiskTier.HIGH and amount > limit:
        return BlockedRisk(
            risk_warning=HIGH_RISK_LIMIT_WARNING,
            compliance_message=COMPLIANCE_BLOCK_MESSAGE,
        )
    return None
