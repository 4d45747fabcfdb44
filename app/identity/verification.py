"""Identity verification (KYC) lifecycle.

    Unregistered -> Registered -> DocumentsSubmitted -> Verified

Each transition is only legal from the state directly before it; an
illegal transition raises VerificationTransitionError and leaves the
account untouched. Only Verified accounts may have transfers evaluated.
Every state has a stable, user-facing prompt.
"""

import structlog

from app.identity.provider import IdentityProvider
from app.models import Account, VerificationStatus

logger = structlog.get_logger()

PROMPTS = {
    VerificationStatus.UNREGISTERED: (
        "Please register to proceed with cross-border payments"
    ),
    VerificationStatus.REGISTERED: (
        "Please complete KYC verification to proceed with cross-border payments"
    ),
    VerificationStatus.DOCUMENTS_SUBMITTED: (
        "KYC documents received. Verification is in progress"
    ),
    VerificationStatus.VERIFIED: "KYC verification successful",
}


class VerificationTransitionError(ValueError):
    """A KYC transition was attempted from the wrong state."""

    def __init__(self, account_id: str, current: VerificationStatus, action: str) -> None:
        self.account_id = account_id
        self.current = current
        self.action = action
        super().__init__(
            f"Cannot {action} for account {account_id} "
            f"in status {current.value}"
        )


def prompt_for(status: VerificationStatus) -> str:
    """Return the prompt shown to an account in ``status``."""
    return PROMPTS[status]


def can_transact(account: Account) -> bool:
    """Only fully verified accounts may reach the compliance engine."""
    return account.verification_status == VerificationStatus.VERIFIED


def _advance(
    account: Account,
    expected: VerificationStatus,
    target: VerificationStatus,
    action: str,
) -> str:
    if account.verification_status != expected:
        logger.warning(
            "kyc_transition_rejected",
            account_id=account.account_id,
            action=action,
            status=account.verification_status.value,
        )
        raise VerificationTransitionError(
            account.account_id, account.verification_status, action
        )

    account.verification_status = target
    logger.info(
        "kyc_transition",
        account_id=account.account_id,
        action=action,
        status=target.value,
    )
    return prompt_for(target)


def register(
    account: Account,
    email: str,
    password: str,
    provider: IdentityProvider,
) -> str:
    """Unregistered -> Registered.

    Credentials are validated by ``provider`` first; the password is
    never stored. Returns the prompt asking the account to complete KYC.
    """
    if account.verification_status != VerificationStatus.UNREGISTERED:
        raise VerificationTransitionError(
            account.account_id, account.verification_status, "register"
        )
    provider.validate_registration(email, password)
    account.email = email.strip()
    return _advance(
        account,
        VerificationStatus.UNREGISTERED,
        VerificationStatus.REGISTERED,
        "register",
    )


def submit_documents(account: Account, document_ref: str) -> str:
    """Registered -> DocumentsSubmitted. ``document_ref`` is opaque."""
    prompt = _advance(
        account,
        VerificationStatus.REGISTERED,
        VerificationStatus.DOCUMENTS_SUBMITTED,
        "submit documents",
    )
    account.document_ref = document_ref
    return prompt


def approve_verification(account: Account) -> str:
    """DocumentsSubmitted -> Verified, on the external reviewer's decision."""
    return _advance(
        account,
        VerificationStatus.DOCUMENTS_SUBMITTED,
        VerificationStatus.VERIFIED,
        "approve verification",
    )
