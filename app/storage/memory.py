"""In-memory storage for accounts and the transfer audit log.

Accounts are kept in a dict keyed by account ID. Each account owns its
velocity state and ledger. All data lives in memory and is lost on
restart; durable storage belongs to whatever service wraps this one.
"""

import threading
from datetime import datetime
from typing import Dict, List, Optional

from app.models import Account, AuditEntry


class AccountNotFoundError(LookupError):
    """No account is registered under the requested ID."""


class MemoryStore:
    """Thread-safe in-memory store for accounts and audit entries."""

    def __init__(self) -> None:
        self._accounts: Dict[str, Account] = {}
        # Chronological audit log of transfer attempts
        self._audit_log: List[AuditEntry] = []
        self._lock = threading.Lock()

    def add_account(self, account: Account) -> None:
        with self._lock:
            self._accounts[account.account_id] = account

    def get_account(self, account_id: str) -> Account:
        """Return the account, or raise AccountNotFoundError."""
        with self._lock:
            account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return account

    def list_accounts(self) -> List[Account]:
        with self._lock:
            return list(self._accounts.values())

    def add_audit(self, entry: AuditEntry) -> None:
        """Append an entry to the audit log."""
        with self._lock:
            self._audit_log.append(entry)

    def get_audit_log(
        self,
        account_id: Optional[str] = None,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[AuditEntry]:
        """Return audit entries, optionally filtered by account and/or time range."""
        with self._lock:
            entries = list(self._audit_log)

        results: List[AuditEntry] = []
        for entry in entries:
            if account_id is not None and entry.account_id != account_id:
                continue
            if since is not None and entry.timestamp < since:
                continue
            if until is not None and entry.timestamp > until:
                continue
            results.append(entry)
        return results
