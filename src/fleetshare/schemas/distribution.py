"""Revenue distribution schemas."""

from pydantic import BaseModel, Field


class RevenueDeposit(BaseModel):
    """Schema for depositing revenue earned by an asset."""

    amount: int = Field(..., gt=0)


class ExpenseRecord(BaseModel):
    """Schema for recording an expense incurred by an asset."""

    amount: int = Field(..., gt=0)


class DepositResult(BaseModel):
    """Accumulator state after a revenue deposit."""

    asset_id: int
    amount: int
    sold_shares: int
    accumulator: int
    cumulative_revenue: int


class ClaimResult(BaseModel):
    """Earnings paid to one holder for one asset."""

    asset_id: int
    holder_id: int
    amount: int
    accumulator: int


class ClaimAllResult(BaseModel):
    """Earnings paid to one holder across every asset."""

    holder_id: int
    total: int
    claims: list[ClaimResult]
