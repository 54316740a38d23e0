"""Holding model: units of one asset owned by one holder."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fleetshare.db.base import Base, TimestampMixin
from fleetshare.db.types import UInt256


class Holding(Base, TimestampMixin):
    """Per (asset, holder) balance and distribution debt snapshot.

    ``debt`` is the asset accumulator recorded at the holder's last
    settlement (purchase, sale or claim). Zero-unit holdings are kept.
    """

    __tablename__ = "holdings"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="RESTRICT"), index=True
    )
    holder_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), index=True)
    units: Mapped[int] = mapped_column(Integer, default=0)
    debt: Mapped[int] = mapped_column(UInt256, default=0)

    __table_args__ = (
        UniqueConstraint("asset_id", "holder_id", name="uq_holding_asset_holder"),
        CheckConstraint("units >= 0", name="ck_holdings_units_non_negative"),
    )
