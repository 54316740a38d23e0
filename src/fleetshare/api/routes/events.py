"""Audit trail endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.constants import APIConstants
from fleetshare.db.session import get_db
from fleetshare.models.ledger_event import LedgerEvent, LedgerEventType
from fleetshare.schemas.event import LedgerEventResponse
from fleetshare.services import event_log

router = APIRouter()


@router.get("", response_model=list[LedgerEventResponse])
async def list_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    asset_id: int | None = None,
    event_type: LedgerEventType | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=APIConstants.MAX_PAGE_SIZE)] = APIConstants.DEFAULT_PAGE_SIZE,
) -> list[LedgerEvent]:
    """
    Read the audit trail, newest first.

    Args:
        db: Database session
        asset_id: Only events about this asset
        event_type: Only events of this kind
        skip: Number of records to skip (pagination)
        limit: Maximum number of records to return

    Returns:
        List of ledger events
    """
    return await event_log.list_events(
        db, asset_id=asset_id, event_type=event_type, skip=skip, limit=limit
    )
