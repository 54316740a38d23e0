"""Append-only audit trail of ledger operations."""

import enum
from typing import Any

from sqlalchemy import JSON, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from fleetshare.db.base import Base, CreatedAtMixin


class LedgerEventType(str, enum.Enum):
    """Domain events emitted by mutating operations."""

    ASSET_CREATED = "asset_created"
    SHARES_BOUGHT = "shares_bought"
    SHARES_SOLD = "shares_sold"
    REVENUE_DEPOSITED = "revenue_deposited"
    EARNINGS_CLAIMED = "earnings_claimed"
    EXPENSE_RECORDED = "expense_recorded"
    ASSET_STATUS_CHANGED = "asset_status_changed"
    FUNDS_WITHDRAWN = "funds_withdrawn"
    FUNDS_RECEIVED = "funds_received"


class LedgerEvent(Base, CreatedAtMixin):
    """Event carrying the key parameters and resulting values of one operation.

    Observers read these; the accounting logic never does.
    """

    __tablename__ = "ledger_events"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    event_type: Mapped[LedgerEventType] = mapped_column(
        Enum(LedgerEventType, native_enum=False, length=32), index=True
    )
    asset_id: Mapped[int | None] = mapped_column(
        ForeignKey("assets.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    actor_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, default=dict)
