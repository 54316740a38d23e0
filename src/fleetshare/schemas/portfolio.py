"""Portfolio schemas."""

from pydantic import BaseModel


class PortfolioPosition(BaseModel):
    """A non-zero holding with its valuation."""

    asset_id: int
    asset_name: str
    units: int
    pending: int
    value: int


class PortfolioResponse(BaseModel):
    """Every position of one holder.

    ``total_value`` prices units at each asset's fixed price per unit.
    """

    holder_id: int
    positions: list[PortfolioPosition]
    total_value: int
    total_pending: int
