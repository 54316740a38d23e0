"""Trade schemas."""

from pydantic import BaseModel, Field


class BuyRequest(BaseModel):
    """Schema for buying shares; ``payment`` is the value sent with the order."""

    units: int = Field(..., gt=0)
    payment: int = Field(..., ge=0)


class SellRequest(BaseModel):
    """Schema for selling shares."""

    units: int = Field(..., gt=0)


class TradeResult(BaseModel):
    """Outcome of a buy or sell.

    ``amount`` is the cost of a purchase or the proceeds of a sale.
    ``settled_earnings`` is the pending revenue paid out before the balance changed.
    """

    asset_id: int
    holder_id: int
    units: int
    amount: int
    refund: int = 0
    settled_earnings: int = 0
    holding_units: int
    available_shares: int
