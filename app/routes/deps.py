"""Accessors for the shared objects attached to application state."""

from datetime import datetime

from fastapi import Request

from app.identity.verification import prompt_for
from app.models import Account, AccountView
from app.screening.orchestrator import TransferOrchestrator
from app.storage.memory import MemoryStore


def get_store(request: Request) -> MemoryStore:
    """Retrieve the memory store from application state."""
    return request.app.state.store


def get_orchestrator(request: Request) -> TransferOrchestrator:
    """Retrieve the transfer orchestrator from application state."""
    return request.app.state.orchestrator


def current_time(request: Request) -> datetime:
    """Read the injected clock."""
    return request.app.state.clock()


def account_view(account: Account) -> AccountView:
    return AccountView(
        account_id=account.account_id,
        email=account.email,
        verification_status=account.verification_status,
        prompt=prompt_for(account.verification_status),
        velocity=account.velocity,
        ledger_size=len(account.ledger),
    )
