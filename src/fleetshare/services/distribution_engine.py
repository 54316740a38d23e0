"""Service layer for proportional revenue distribution.

Revenue is distributed with a per-share accumulator: a deposit adds
``amount * SCALE // sold_shares`` to the asset's accumulator, and a holder's
entitlement is ``(accumulator - debt) * units // SCALE``, where ``debt`` is the
accumulator value at the holder's last settlement. Deposits cost O(1)
regardless of the number of holders and each holder settles in O(1) when they
choose to (pull-based distribution).

All scaled arithmetic goes through ``scaled_revenue_per_share`` and
``scaled_entitlement``; both floor.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.constants import SCALE
from fleetshare.core.exceptions import (
    NothingToClaimError,
    NothingToDistributeError,
    ValidationError,
)
from fleetshare.core.reentrancy import non_reentrant
from fleetshare.db.session import read_only_transaction, transactional
from fleetshare.models.asset import Asset
from fleetshare.models.holding import Holding
from fleetshare.models.ledger_event import LedgerEventType
from fleetshare.models.treasury import MovementReason
from fleetshare.schemas.distribution import ClaimAllResult, ClaimResult, DepositResult
from fleetshare.services.asset_registry import get_asset
from fleetshare.services.event_log import record_event
from fleetshare.services.holder_ledger import find_holding, open_positions
from fleetshare.services.transfer_service import TransferGateway

logger = logging.getLogger(__name__)


def scaled_revenue_per_share(amount: int, sold_shares: int) -> int:
    """Accumulator increase for depositing ``amount`` over ``sold_shares``.

    Truncation loses at most 1/SCALE of a currency unit per share.

    Example:
        >>> scaled_revenue_per_share(100, 10) == 10 * SCALE
        True
    """
    return amount * SCALE // sold_shares


def scaled_entitlement(accumulator: int, debt: int, units: int) -> int:
    """Currency owed to ``units`` shares for the accumulator gap since ``debt``."""
    return (accumulator - debt) * units // SCALE


def pending_for(asset: Asset, holding: Holding | None) -> int:
    """Claimable earnings of a holding; 0 for a missing or empty holding."""
    if holding is None or holding.units == 0:
        return 0
    return scaled_entitlement(asset.accumulator, holding.debt, holding.units)


def settle_holding(asset: Asset, holding: Holding | None) -> int:
    """Rebase a holding's debt onto the current accumulator.

    Returns the amount that became payable. Nothing owed is a silent no-op
    that leaves the holding untouched, so settling twice without a deposit in
    between never pays twice. The caller pays the returned amount after
    flushing, and only ``debt`` is modified here.
    """
    amount = pending_for(asset, holding)
    if amount == 0:
        return 0
    holding.debt = asset.accumulator
    return amount


async def pending_of(db: AsyncSession, asset_id: int, holder_id: int) -> int:
    """Claimable earnings of a holder in one asset. Pure read.

    Raises:
        NotFoundError: If the asset does not exist
    """
    async with read_only_transaction(db):
        asset = await get_asset(db, asset_id)
        holding = await find_holding(db, asset_id, holder_id)
    return pending_for(asset, holding)


@non_reentrant
async def deposit_revenue(
    db: AsyncSession,
    gateway: TransferGateway,
    *,
    asset_id: int,
    amount: int,
    depositor_id: int | None = None,
) -> DepositResult:
    """Distribute revenue to the current holders of an asset.

    The deposited value is collected into the treasury, where it backs
    future claims.

    Args:
        db: Database session
        gateway: Transfer primitive
        asset_id: Asset that earned the revenue
        amount: Revenue in the smallest currency unit (> 0)
        depositor_id: Administrator making the deposit

    Returns:
        DepositResult with the new accumulator

    Raises:
        ValidationError: If amount is not positive
        NotFoundError: If the asset does not exist
        NothingToDistributeError: If no shares of the asset are sold
    """
    if amount <= 0:
        raise ValidationError("Deposit amount must be greater than 0")

    async with transactional(db):
        asset = await get_asset(db, asset_id, for_update=True)
        sold = asset.sold_shares
        if sold == 0:
            raise NothingToDistributeError(
                f"Asset {asset_id} has no shares outstanding to distribute revenue to"
            )

        asset.accumulator += scaled_revenue_per_share(amount, sold)
        asset.cumulative_revenue += amount
        record_event(
            db,
            LedgerEventType.REVENUE_DEPOSITED,
            asset_id=asset_id,
            actor_id=depositor_id,
            amount=amount,
            sold_shares=sold,
            accumulator=asset.accumulator,
        )
        await db.flush()

        await gateway.collect(
            depositor_id, amount, reason=MovementReason.REVENUE_DEPOSIT, asset_id=asset_id
        )

    return DepositResult(
        asset_id=asset_id,
        amount=amount,
        sold_shares=sold,
        accumulator=asset.accumulator,
        cumulative_revenue=asset.cumulative_revenue,
    )


@non_reentrant
async def record_expense(
    db: AsyncSession,
    *,
    asset_id: int,
    amount: int,
    recorded_by: int | None = None,
) -> Asset:
    """Add to an asset's running expense total.

    Expenses are informational: they are not netted against the accumulator.

    Raises:
        ValidationError: If amount is not positive
        NotFoundError: If the asset does not exist
    """
    if amount <= 0:
        raise ValidationError("Expense amount must be greater than 0")

    async with transactional(db):
        asset = await get_asset(db, asset_id, for_update=True)
        asset.cumulative_expense += amount
        record_event(
            db,
            LedgerEventType.EXPENSE_RECORDED,
            asset_id=asset_id,
            actor_id=recorded_by,
            amount=amount,
            cumulative_expense=asset.cumulative_expense,
        )
        await db.flush()

    return asset


@non_reentrant
async def claim(
    db: AsyncSession,
    gateway: TransferGateway,
    *,
    asset_id: int,
    holder_id: int,
) -> ClaimResult:
    """Pay a holder's pending earnings for one asset.

    Raises:
        NotFoundError: If the asset does not exist
        NothingToClaimError: If nothing is pending
        TransferFailureError: If the payout fails (the debt rebase is rolled back)
    """
    async with transactional(db):
        asset = await get_asset(db, asset_id, for_update=True)
        holding = await find_holding(db, asset_id, holder_id, for_update=True)
        amount = settle_holding(asset, holding)
        if amount == 0:
            raise NothingToClaimError(f"Nothing to claim on asset {asset_id}")

        record_event(
            db,
            LedgerEventType.EARNINGS_CLAIMED,
            asset_id=asset_id,
            actor_id=holder_id,
            amount=amount,
            accumulator=asset.accumulator,
        )
        await db.flush()

        await gateway.pay(
            holder_id, amount, reason=MovementReason.EARNINGS_PAYOUT, asset_id=asset_id
        )

    return ClaimResult(
        asset_id=asset_id,
        holder_id=holder_id,
        amount=amount,
        accumulator=asset.accumulator,
    )


@non_reentrant
async def claim_all(
    db: AsyncSession,
    gateway: TransferGateway,
    *,
    holder_id: int,
) -> ClaimAllResult:
    """Pay a holder's pending earnings across every asset they hold.

    Holdings are settled in asset enumeration order and the total is paid in
    a single transfer.

    Raises:
        NothingToClaimError: If nothing is pending on any asset
        TransferFailureError: If the payout fails (every rebase is rolled back)
    """
    async with transactional(db):
        claims: list[ClaimResult] = []
        for holding, asset in await open_positions(db, holder_id, for_update=True):
            amount = settle_holding(asset, holding)
            if amount == 0:
                continue
            record_event(
                db,
                LedgerEventType.EARNINGS_CLAIMED,
                asset_id=asset.id,
                actor_id=holder_id,
                amount=amount,
                accumulator=asset.accumulator,
            )
            claims.append(
                ClaimResult(
                    asset_id=asset.id,
                    holder_id=holder_id,
                    amount=amount,
                    accumulator=asset.accumulator,
                )
            )

        total = sum(c.amount for c in claims)
        if total == 0:
            raise NothingToClaimError("Nothing to claim on any asset")
        await db.flush()

        await gateway.pay(holder_id, total, reason=MovementReason.EARNINGS_PAYOUT)

    logger.info(f"Holder {holder_id} claimed {total} across {len(claims)} assets")
    return ClaimAllResult(holder_id=holder_id, total=total, claims=claims)
