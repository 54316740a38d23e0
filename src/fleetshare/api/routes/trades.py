"""Holder-facing trading and claim endpoints for a single asset."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.config import settings
from fleetshare.core.deps import CurrentActiveUser, Gateway
from fleetshare.core.rate_limit import limiter
from fleetshare.db.session import get_db
from fleetshare.schemas.distribution import ClaimResult
from fleetshare.schemas.trade import BuyRequest, SellRequest, TradeResult
from fleetshare.services import distribution_engine, trade_gateway

router = APIRouter()


@router.post("/{asset_id}/buy", response_model=TradeResult)
@limiter.limit(settings.TRADE_RATE_LIMIT)
async def buy_shares(
    request: Request,
    asset_id: int,
    order: BuyRequest,
    current_user: CurrentActiveUser,
    gateway: Gateway,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TradeResult:
    """
    Buy shares of an asset as the current user.

    Args:
        asset_id: Asset to buy
        order: Units and the payment sent with the order
        current_user: The authenticated holder (from dependency)
        gateway: Transfer primitive (from dependency)
        db: Database session

    Returns:
        Cost, refund of any overpayment, and earnings settled before the purchase

    Raises:
        NotFoundError: If the asset does not exist
        InactiveAssetError: If trading is disabled
        InsufficientAvailabilityError: If not enough shares are available
        InsufficientPaymentError: If the payment is below the cost
    """
    return await trade_gateway.buy_shares(
        db,
        gateway,
        asset_id=asset_id,
        holder_id=current_user.id,
        units=order.units,
        payment=order.payment,
    )


@router.post("/{asset_id}/sell", response_model=TradeResult)
@limiter.limit(settings.TRADE_RATE_LIMIT)
async def sell_shares(
    request: Request,
    asset_id: int,
    order: SellRequest,
    current_user: CurrentActiveUser,
    gateway: Gateway,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TradeResult:
    """
    Sell shares of an asset as the current user.

    Raises:
        NotFoundError: If the asset does not exist
        InactiveAssetError: If trading is disabled
        InsufficientHoldingError: If the user owns fewer units
    """
    return await trade_gateway.sell_shares(
        db,
        gateway,
        asset_id=asset_id,
        holder_id=current_user.id,
        units=order.units,
    )


@router.post("/{asset_id}/claim", response_model=ClaimResult)
@limiter.limit(settings.TRADE_RATE_LIMIT)
async def claim(
    request: Request,
    asset_id: int,
    current_user: CurrentActiveUser,
    gateway: Gateway,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClaimResult:
    """
    Claim the current user's pending earnings on one asset.

    Raises:
        NotFoundError: If the asset does not exist
        NothingToClaimError: If nothing is pending
    """
    return await distribution_engine.claim(
        db, gateway, asset_id=asset_id, holder_id=current_user.id
    )
