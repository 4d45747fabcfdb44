"""Compliance rule chain.

Executes the transfer rules in a fixed order, first match wins:
  1. Restricted currency (compliance block)
  2. High-risk country ceiling (risk block)
  3. Velocity / rapid-fire pattern (suspicious activity block)
  4. Available funds ceiling (insufficient funds block)

Compliance rules preempt fraud heuristics, which preempt business limits.
Later rules never run once one has fired. A transfer that passes all four
is approved at its converted amount; committing it is the caller's job.
"""

import uuid
from datetime import datetime
from decimal import Decimal

import structlog

from app.models import Approved, Decision, RulesConfig, TransferRequest, VelocityState
from app.screening.converter import parse_amount
from app.screening.rules.country_risk import check_country_risk
from app.screening.rules.funds import check_funds
from app.screening.rules.restricted_currency import check_restricted_currency
from app.screening.rules.velocity import check_velocity

logger = structlog.get_logger()


class ComplianceEngine:
    """Evaluates a transfer request against the ordered rule chain."""

    def __init__(self, config: RulesConfig) -> None:
        self.config = config

    def evaluate(
        self,
        request: TransferRequest,
        converted_amount: Decimal,
        velocity_state: VelocityState,
        now: datetime,
    ) -> Decision:
        """Return exactly one decision for the request.

        ``request.amount`` must already be known to parse; rules 2 and 4
        compare the requested amount, not ``converted_amount``.
        """
        amount = parse_amount(request.amount)
        if amount is None:
            raise ValueError(f"Cannot evaluate unparsable amount {request.amount!r}")

        config = self.config
        rules = (
            # 1. Restricted currency -- categorical refusal
            ("restricted_currency", lambda: check_restricted_currency(
                request.target_currency,
                config.restricted_currencies,
            )),
            # 2. High-risk country ceiling -- pre-conversion amount
            ("country_risk", lambda: check_country_risk(
                request.recipient_country_risk_tier,
                amount,
                limit=config.high_risk_limit,
            )),
            # 3. Velocity -- rapid consecutive transfers
            ("velocity", lambda: check_velocity(
                velocity_state,
                now,
                window_ms=config.velocity_window_ms,
                min_count=config.velocity_min_count,
            )),
            # 4. Funds ceiling -- pre-conversion amount
            ("funds", lambda: check_funds(amount, limit=config.funds_limit)),
        )

        for rule_name, check in rules:
            decision = check()
            if decision is not None:
                logger.info(
                    "transfer_rule_fired",
                    rule=rule_name,
                    outcome=decision.outcome,
                    target_currency=request.target_currency.value,
                )
                return decision

        return Approved(
            transaction_id=str(uuid.uuid4()),
            amount=converted_amount,
            currency=request.target_currency,
        )
