"""Treasury schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from fleetshare.models.treasury import MovementDirection, MovementReason


class FundsTransfer(BaseModel):
    """Schema for incoming funds or operator withdrawals."""

    amount: int = Field(..., gt=0)


class BalanceResponse(BaseModel):
    """Value currently held by the ledger."""

    balance: int


class FundMovementResponse(BaseModel):
    """Schema for a booked value movement."""

    id: int
    direction: MovementDirection
    reason: MovementReason
    counterparty_id: int | None
    asset_id: int | None
    amount: int
    created_at: datetime

    model_config = {"from_attributes": True}
