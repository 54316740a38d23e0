"""Asset schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from fleetshare.core.constants import AssetConstants


class AssetCreate(BaseModel):
    """Schema for registering a vehicle."""

    name: str = Field(..., min_length=1, max_length=AssetConstants.MAX_NAME_LENGTH)
    image_ref: str = Field("", max_length=AssetConstants.MAX_IMAGE_REF_LENGTH)
    total_shares: int = Field(..., gt=0, le=AssetConstants.MAX_TOTAL_SHARES)
    price_per_unit: int = Field(..., gt=0, description="Price per share in the smallest currency unit")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names made only of whitespace."""
        if not v.strip():
            raise ValueError("Name must not be empty")
        return v.strip()


class AssetStatusUpdate(BaseModel):
    """Schema for toggling the trading gate."""

    is_active: bool


class AssetResponse(BaseModel):
    """Schema for asset response."""

    id: int
    name: str
    image_ref: str
    total_shares: int
    available_shares: int
    sold_shares: int
    price_per_unit: int
    cumulative_revenue: int
    cumulative_expense: int
    accumulator: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AssetCount(BaseModel):
    """Number of registered assets."""

    count: int


class SoldShares(BaseModel):
    """Shares of an asset currently owned by holders."""

    asset_id: int
    sold_shares: int
