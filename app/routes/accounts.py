"""Account registration and KYC verification endpoints."""

import uuid
from typing import List

from fastapi import APIRouter, Request

from app.identity import verification
from app.models import (
    Account,
    AccountView,
    DocumentSubmission,
    LedgerEntry,
    RegistrationRequest,
)
from app.routes.deps import account_view, get_store

router = APIRouter(prefix="/api")


@router.post("/accounts", response_model=AccountView, status_code=201)
async def register_account(
    registration: RegistrationRequest,
    request: Request,
) -> AccountView:
    """Register a new account and prompt it to complete KYC.

    The account is only stored once the identity provider has accepted
    the credentials.
    """
    account = Account(account_id=str(uuid.uuid4()))
    verification.register(
        account,
        registration.email,
        registration.password,
        request.app.state.identity_provider,
    )
    get_store(request).add_account(account)
    return account_view(account)


@router.get("/accounts", response_model=List[AccountView])
async def list_accounts(request: Request) -> List[AccountView]:
    """List registered accounts with their KYC state."""
    return [account_view(a) for a in get_store(request).list_accounts()]


@router.get("/accounts/{account_id}", response_model=AccountView)
async def get_account(account_id: str, request: Request) -> AccountView:
    """Return an account with its current KYC prompt."""
    return account_view(get_store(request).get_account(account_id))


@router.post("/accounts/{account_id}/documents", response_model=AccountView)
async def submit_documents(
    account_id: str,
    submission: DocumentSubmission,
    request: Request,
) -> AccountView:
    """Record that KYC documents were submitted.

    With auto-approval enabled the verification is approved immediately.
    """
    account = get_store(request).get_account(account_id)
    verification.submit_documents(account, submission.document_ref)
    if request.app.state.settings.kyc_auto_approve:
        verification.approve_verification(account)
    return account_view(account)


@router.post("/accounts/{account_id}/verification/approve", response_model=AccountView)
async def approve_verification(account_id: str, request: Request) -> AccountView:
    """Apply the external reviewer's approval to a submitted account."""
    account = get_store(request).get_account(account_id)
    verification.approve_verification(account)
    return account_view(account)


@router.get("/accounts/{account_id}/ledger", response_model=List[LedgerEntry])
async def get_ledger(account_id: str, request: Request) -> List[LedgerEntry]:
    """Return the account's committed transfers, oldest first."""
    account = get_store(request).get_account(account_id)
    return list(account.ledger.entries)
