"""Service layer for buying and selling asset shares.

Both operations settle the holder's pending earnings before the unit balance
changes, so the debt snapshot is always rebased against the units that earned
it. Value moves only after every ledger change of the trade is flushed.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.exceptions import (
    InactiveAssetError,
    InsufficientAvailabilityError,
    InsufficientHoldingError,
    InsufficientPaymentError,
    ValidationError,
)
from fleetshare.core.reentrancy import non_reentrant
from fleetshare.db.session import transactional
from fleetshare.models.asset import Asset
from fleetshare.models.ledger_event import LedgerEventType
from fleetshare.models.treasury import MovementReason
from fleetshare.schemas.trade import TradeResult
from fleetshare.services.asset_registry import get_asset
from fleetshare.services.distribution_engine import settle_holding
from fleetshare.services.event_log import record_event
from fleetshare.services.holder_ledger import find_holding, get_or_create_holding
from fleetshare.services.transfer_service import TransferGateway

logger = logging.getLogger(__name__)


async def _tradable_asset(db: AsyncSession, asset_id: int) -> Asset:
    asset = await get_asset(db, asset_id, for_update=True)
    if not asset.is_active:
        raise InactiveAssetError(f"Trading is disabled for asset {asset_id}")
    return asset


def _record_settlement(db: AsyncSession, asset: Asset, holder_id: int, amount: int) -> None:
    if amount:
        record_event(
            db,
            LedgerEventType.EARNINGS_CLAIMED,
            asset_id=asset.id,
            actor_id=holder_id,
            amount=amount,
            accumulator=asset.accumulator,
        )


@non_reentrant
async def buy_shares(
    db: AsyncSession,
    gateway: TransferGateway,
    *,
    asset_id: int,
    holder_id: int,
    units: int,
    payment: int,
) -> TradeResult:
    """Buy shares of an asset.

    The full payment is collected, any pending earnings on the existing
    holding are paid out, and payment above ``units * price_per_unit`` is
    refunded.

    Args:
        db: Database session
        gateway: Transfer primitive
        asset_id: Asset to buy
        holder_id: Buyer
        units: Number of shares (> 0)
        payment: Value sent with the order

    Returns:
        TradeResult with cost, refund and settled earnings

    Raises:
        ValidationError: If units is not positive or payment is negative
        NotFoundError: If the asset does not exist
        InactiveAssetError: If trading is disabled
        InsufficientAvailabilityError: If fewer than ``units`` shares are available
        InsufficientPaymentError: If payment is below the cost
        TransferFailureError: If a transfer fails
    """
    if units <= 0:
        raise ValidationError("Units must be greater than 0")
    if payment < 0:
        raise ValidationError("Payment must not be negative")

    async with transactional(db):
        asset = await _tradable_asset(db, asset_id)
        if units > asset.available_shares:
            raise InsufficientAvailabilityError(
                f"Only {asset.available_shares} shares of asset {asset_id} are available"
            )
        cost = units * asset.price_per_unit
        if payment < cost:
            raise InsufficientPaymentError(f"Payment {payment} is below the cost of {cost}")

        holding = await get_or_create_holding(db, asset_id, holder_id)
        settled = settle_holding(asset, holding)
        asset.available_shares -= units
        holding.units += units
        holding.debt = asset.accumulator
        refund = payment - cost

        _record_settlement(db, asset, holder_id, settled)
        record_event(
            db,
            LedgerEventType.SHARES_BOUGHT,
            asset_id=asset_id,
            actor_id=holder_id,
            units=units,
            cost=cost,
            refund=refund,
            holding_units=holding.units,
            available_shares=asset.available_shares,
        )
        await db.flush()

        await gateway.collect(
            holder_id, payment, reason=MovementReason.SHARE_PURCHASE, asset_id=asset_id
        )
        if settled:
            await gateway.pay(
                holder_id, settled, reason=MovementReason.EARNINGS_PAYOUT, asset_id=asset_id
            )
        if refund:
            await gateway.pay(
                holder_id, refund, reason=MovementReason.PURCHASE_REFUND, asset_id=asset_id
            )

    return TradeResult(
        asset_id=asset_id,
        holder_id=holder_id,
        units=units,
        amount=cost,
        refund=refund,
        settled_earnings=settled,
        holding_units=holding.units,
        available_shares=asset.available_shares,
    )


@non_reentrant
async def sell_shares(
    db: AsyncSession,
    gateway: TransferGateway,
    *,
    asset_id: int,
    holder_id: int,
    units: int,
) -> TradeResult:
    """Sell shares of an asset back at its fixed price.

    Pending earnings are paid out together with the proceeds.

    Raises:
        ValidationError: If units is not positive
        NotFoundError: If the asset does not exist
        InactiveAssetError: If trading is disabled
        InsufficientHoldingError: If the holder owns fewer than ``units`` shares
        TransferFailureError: If a transfer fails
    """
    if units <= 0:
        raise ValidationError("Units must be greater than 0")

    async with transactional(db):
        asset = await _tradable_asset(db, asset_id)
        holding = await find_holding(db, asset_id, holder_id, for_update=True)
        owned = holding.units if holding is not None else 0
        if holding is None or owned < units:
            raise InsufficientHoldingError(
                f"Holder owns {owned} shares of asset {asset_id}, cannot sell {units}"
            )

        settled = settle_holding(asset, holding)
        holding.units -= units
        asset.available_shares += units
        proceeds = units * asset.price_per_unit

        _record_settlement(db, asset, holder_id, settled)
        record_event(
            db,
            LedgerEventType.SHARES_SOLD,
            asset_id=asset_id,
            actor_id=holder_id,
            units=units,
            proceeds=proceeds,
            holding_units=holding.units,
            available_shares=asset.available_shares,
        )
        await db.flush()

        if settled:
            await gateway.pay(
                holder_id, settled, reason=MovementReason.EARNINGS_PAYOUT, asset_id=asset_id
            )
        await gateway.pay(holder_id, proceeds, reason=MovementReason.SHARE_SALE, asset_id=asset_id)

    return TradeResult(
        asset_id=asset_id,
        holder_id=holder_id,
        units=units,
        amount=proceeds,
        settled_earnings=settled,
        holding_units=holding.units,
        available_shares=asset.available_shares,
    )
