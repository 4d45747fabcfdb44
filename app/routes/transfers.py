"""Transfer submission endpoint."""

from fastapi import APIRouter, Request

from app.models import TransferOutcome, TransferRequest, TransferSubmission
from app.routes.deps import current_time, get_orchestrator, get_store

router = APIRouter(prefix="/api")


@router.post("/accounts/{account_id}/transfers", response_model=TransferOutcome)
async def attempt_transfer(
    account_id: str,
    submission: TransferSubmission,
    request: Request,
) -> TransferOutcome:
    """Screen and, if approved, commit a transfer for the account.

    Every rejection is a normal 200 response; the ``outcome`` field says
    which check stopped the transfer and the message fields carry the
    user-facing text.
    """
    account = get_store(request).get_account(account_id)
    now = submission.timestamp or current_time(request)
    transfer = TransferRequest(**submission.model_dump(exclude={"timestamp"}))
    return get_orchestrator(request).attempt_transfer(account, transfer, now)
