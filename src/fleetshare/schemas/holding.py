"""Holding schemas."""

from pydantic import BaseModel


class HoldingResponse(BaseModel):
    """One holder's position in one asset.

    ``units`` and ``debt`` are 0 when the holder never bought the asset.
    """

    asset_id: int
    holder_id: int
    units: int
    debt: int
    pending: int


class PendingResponse(BaseModel):
    """Claimable earnings of one holder in one asset."""

    asset_id: int
    holder_id: int
    pending: int
