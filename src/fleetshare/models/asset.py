"""Asset model: one revenue-generating vehicle split into unit shares."""

from sqlalchemy import Boolean, CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fleetshare.core.constants import AssetConstants
from fleetshare.db.base import Base, TimestampMixin
from fleetshare.db.types import UInt256


class Asset(Base, TimestampMixin):
    """Registered vehicle with its share counters and distribution accumulator.

    ``accumulator`` is the cumulative revenue per share scaled by
    ``DistributionConstants.SCALE``; it never decreases.
    """

    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True, index=True)
    name: Mapped[str] = mapped_column(String(AssetConstants.MAX_NAME_LENGTH))
    image_ref: Mapped[str] = mapped_column(String(AssetConstants.MAX_IMAGE_REF_LENGTH), default="")
    total_shares: Mapped[int] = mapped_column(Integer)
    available_shares: Mapped[int] = mapped_column(Integer)
    price_per_unit: Mapped[int] = mapped_column(UInt256)
    cumulative_revenue: Mapped[int] = mapped_column(UInt256, default=0)
    cumulative_expense: Mapped[int] = mapped_column(UInt256, default=0)
    accumulator: Mapped[int] = mapped_column(UInt256, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    __table_args__ = (
        CheckConstraint("total_shares > 0", name="ck_assets_total_shares_positive"),
        CheckConstraint(
            "available_shares >= 0 AND available_shares <= total_shares",
            name="ck_assets_available_shares_range",
        ),
    )

    @property
    def sold_shares(self) -> int:
        """Shares currently owned by holders."""
        return self.total_shares - self.available_shares
