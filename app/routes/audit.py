"""Audit log endpoint for compliance review."""

from typing import List, Optional

from fastapi import APIRouter, Query, Request
from pydantic import AwareDatetime

from app.models import AuditEntry
from app.routes.deps import get_store

router = APIRouter(prefix="/api")


@router.get("/audit", response_model=List[AuditEntry])
async def get_audit_log(
    request: Request,
    account_id: Optional[str] = Query(default=None),
    from_date: Optional[AwareDatetime] = Query(default=None),
    to_date: Optional[AwareDatetime] = Query(default=None),
) -> List[AuditEntry]:
    """Retrieve transfer attempts with optional filters.

    Filters:
      - account_id: attempts made by one account
      - from_date: attempts at or after this time
      - to_date: attempts at or before this time
    """
    store = get_store(request)
    return store.get_audit_log(
        account_id=account_id,
        since=from_date,
        until=to_date,
    )
