"""Ledger event schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from fleetshare.models.ledger_event import LedgerEventType


class LedgerEventResponse(BaseModel):
    """Schema for an audit trail entry."""

    id: int
    event_type: LedgerEventType
    asset_id: int | None
    actor_id: int | None
    payload: dict[str, Any]
    created_at: datetime

    model_config = {"from_attributes": True}
