"""Treasury models: the pooled balance and its journal of value movements."""

import enum

from sqlalchemy import Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fleetshare.db.base import Base, CreatedAtMixin, TimestampMixin
from fleetshare.db.types import UInt256

# The treasury is a single row
TREASURY_ID = 1


class MovementDirection(str, enum.Enum):
    """Whether value entered or left the treasury."""

    IN = "in"
    OUT = "out"


class MovementReason(str, enum.Enum):
    """Operation that caused a value movement."""

    SHARE_PURCHASE = "share_purchase"
    PURCHASE_REFUND = "purchase_refund"
    SHARE_SALE = "share_sale"
    REVENUE_DEPOSIT = "revenue_deposit"
    EARNINGS_PAYOUT = "earnings_payout"
    OPERATOR_WITHDRAWAL = "operator_withdrawal"
    INCIDENTAL_RECEIPT = "incidental_receipt"


class Treasury(Base, TimestampMixin):
    """Running totals of all value held by the ledger."""

    __tablename__ = "treasury"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=TREASURY_ID)
    balance: Mapped[int] = mapped_column(UInt256, default=0)
    total_in: Mapped[int] = mapped_column(UInt256, default=0)
    total_out: Mapped[int] = mapped_column(UInt256, default=0)


class FundMovement(Base, CreatedAtMixin):
    """One value transfer into or out of the treasury."""

    __tablename__ = "fund_movements"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    direction: Mapped[MovementDirection] = mapped_column(
        Enum(MovementDirection, native_enum=False, length=8)
    )
    reason: Mapped[MovementReason] = mapped_column(
        Enum(MovementReason, native_enum=False, length=32)
    )
    counterparty_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    asset_id: Mapped[int | None] = mapped_column(
        ForeignKey("assets.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    amount: Mapped[int] = mapped_column(UInt256)
    memo: Mapped[str | None] = mapped_column(String(255), nullable=True)
