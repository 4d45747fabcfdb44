"""Single transfer attempt, end to end.

  1. Identity gate: only Verified accounts go further.
  2. Currency conversion: an unparsable amount stops here, unevaluated.
  3. Compliance rule chain against the account's velocity state.
  4. On approval only: advance velocity state and append to the ledger.

Attempts on the same account are serialised by a per-account lock so
velocity counting and ledger appends stay linearizable. Attempts on
different accounts never wait on each other.
"""

import threading
from datetime import datetime
from typing import Dict, Optional

import structlog

from app.identity.verification import can_transact, prompt_for
from app.models import (
    Account,
    Approved,
    AuditEntry,
    LedgerEntry,
    NoConversion,
    TransferOutcome,
    TransferRequest,
    VerificationRequired,
)
from app.screening.converter import RateTable, convert, parse_amount
from app.screening.engine import ComplianceEngine
from app.screening.velocity import record_transaction
from app.storage.memory import MemoryStore

logger = structlog.get_logger()

NO_CONVERSION_MESSAGE = "Enter a valid amount to convert before proceeding to payment"


class TransferOrchestrator:
    """Wires identity gate, converter and rule engine for one attempt."""

    def __init__(
        self,
        engine: ComplianceEngine,
        rates: Optional[RateTable] = None,
        store: Optional[MemoryStore] = None,
    ) -> None:
        self.engine = engine
        self.rates = rates
        self.store = store
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, account_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(account_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[account_id] = lock
            return lock

    def attempt_transfer(
        self,
        account: Account,
        request: TransferRequest,
        now: datetime,
    ) -> TransferOutcome:
        """Process one transfer attempt and return its outcome."""
        with self._lock_for(account.account_id):
            outcome = self._attempt(account, request, now)
            # Audited under the lock so the log follows commit order
            if self.store is not None:
                self.store.add_audit(AuditEntry(
                    account_id=account.account_id,
                    timestamp=now,
                    request=request,
                    outcome=outcome.outcome,
                    transaction_id=getattr(outcome, "transaction_id", None),
                ))
        return outcome

    def _attempt(
        self,
        account: Account,
        request: TransferRequest,
        now: datetime,
    ) -> TransferOutcome:
        # Identity gate precedes every other check
        if not can_transact(account):
            logger.info(
                "transfer_verification_required",
                account_id=account.account_id,
                status=account.verification_status.value,
            )
            return VerificationRequired(
                verification_status=account.verification_status,
                prompt=prompt_for(account.verification_status),
            )

        conversion = convert(
            request.source_currency,
            request.target_currency,
            request.amount,
            self.rates,
        )
        if conversion is None:
            logger.info("transfer_not_converted", account_id=account.account_id)
            return NoConversion(reason=NO_CONVERSION_MESSAGE)

        decision = self.engine.evaluate(
            request,
            conversion.converted_amount,
            account.velocity,
            now,
        )
        if not isinstance(decision, Approved):
            return decision

        # Commit: only approved transfers touch velocity state and the ledger
        account.velocity = record_transaction(account.velocity, now)
        account.ledger.append(LedgerEntry(
            transaction_id=decision.transaction_id,
            amount=parse_amount(request.amount),
            converted_amount=conversion.converted_amount,
            source_currency=request.source_currency,
            target_currency=request.target_currency,
            timestamp=now,
        ))
        logger.info(
            "transfer_approved",
            account_id=account.account_id,
            transaction_id=decision.transaction_id,
            amount=str(decision.amount),
            currency=decision.currency.value,
            transaction_count=account.velocity.transaction_count,
        )
        return decision
