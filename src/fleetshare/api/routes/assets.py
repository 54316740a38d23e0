"""Asset catalog and revenue distribution endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.config import settings
from fleetshare.core.deps import CurrentAdministrator, Gateway
from fleetshare.core.rate_limit import limiter
from fleetshare.db.session import get_db
from fleetshare.models.asset import Asset
from fleetshare.schemas.asset import (
    AssetCount,
    AssetCreate,
    AssetResponse,
    AssetStatusUpdate,
    SoldShares,
)
from fleetshare.schemas.distribution import DepositResult, ExpenseRecord, RevenueDeposit
from fleetshare.schemas.holding import HoldingResponse, PendingResponse
from fleetshare.services import asset_registry, distribution_engine, holder_ledger

router = APIRouter()


@router.post("", response_model=AssetResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.ADMIN_RATE_LIMIT)
async def create_asset(
    request: Request,
    asset_in: AssetCreate,
    current_user: CurrentAdministrator,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Asset:
    """
    Register a new vehicle (administrator only).

    Args:
        asset_in: Asset data (validated Pydantic model)
        current_user: The authenticated administrator (from dependency)
        db: Database session

    Returns:
        The created asset with all shares available
    """
    return await asset_registry.create_asset(
        db,
        name=asset_in.name,
        image_ref=asset_in.image_ref,
        total_shares=asset_in.total_shares,
        price_per_unit=asset_in.price_per_unit,
        created_by=current_user.id,
    )


@router.get("", response_model=list[AssetResponse])
async def list_assets(db: Annotated[AsyncSession, Depends(get_db)]) -> list[Asset]:
    """List every asset in creation order."""
    return await asset_registry.list_assets(db)


@router.get("/count", response_model=AssetCount)
async def asset_count(db: Annotated[AsyncSession, Depends(get_db)]) -> AssetCount:
    """Number of registered assets."""
    return AssetCount(count=await asset_registry.asset_count(db))


@router.get("/{asset_id}", response_model=AssetResponse)
async def get_asset(
    asset_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Asset:
    """
    Get one asset.

    Raises:
        NotFoundError: If the asset does not exist
    """
    return await asset_registry.get_asset(db, asset_id)


@router.get("/{asset_id}/sold-shares", response_model=SoldShares)
async def sold_shares(
    asset_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SoldShares:
    """Shares of an asset currently owned by holders."""
    return SoldShares(
        asset_id=asset_id,
        sold_shares=await asset_registry.sold_shares_of(db, asset_id),
    )


@router.patch("/{asset_id}/status", response_model=AssetResponse)
@limiter.limit(settings.ADMIN_RATE_LIMIT)
async def set_asset_status(
    request: Request,
    asset_id: int,
    status_in: AssetStatusUpdate,
    current_user: CurrentAdministrator,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Asset:
    """
    Open or close trading on an asset (administrator only).

    Raises:
        NotFoundError: If the asset does not exist
    """
    return await asset_registry.set_asset_active(
        db, asset_id, status_in.is_active, changed_by=current_user.id
    )


@router.post("/{asset_id}/revenue", response_model=DepositResult)
@limiter.limit(settings.ADMIN_RATE_LIMIT)
async def deposit_revenue(
    request: Request,
    asset_id: int,
    deposit: RevenueDeposit,
    current_user: CurrentAdministrator,
    gateway: Gateway,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DepositResult:
    """
    Distribute revenue to the asset's current holders (administrator only).

    Args:
        asset_id: Asset that earned the revenue
        deposit: Amount in the smallest currency unit
        current_user: The authenticated administrator (from dependency)
        gateway: Transfer primitive (from dependency)
        db: Database session

    Returns:
        The new accumulator state

    Raises:
        NotFoundError: If the asset does not exist
        NothingToDistributeError: If no shares have been sold
    """
    return await distribution_engine.deposit_revenue(
        db,
        gateway,
        asset_id=asset_id,
        amount=deposit.amount,
        depositor_id=current_user.id,
    )


@router.post("/{asset_id}/expenses", response_model=AssetResponse)
@limiter.limit(settings.ADMIN_RATE_LIMIT)
async def record_expense(
    request: Request,
    asset_id: int,
    expense: ExpenseRecord,
    current_user: CurrentAdministrator,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Asset:
    """Record an expense against an asset (administrator only, informational)."""
    return await distribution_engine.record_expense(
        db, asset_id=asset_id, amount=expense.amount, recorded_by=current_user.id
    )


@router.get("/{asset_id}/holders/{holder_id}", response_model=HoldingResponse)
async def holding_of(
    asset_id: int,
    holder_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HoldingResponse:
    """
    One holder's position in one asset.

    A holder who never bought the asset gets a zero position.

    Raises:
        NotFoundError: If the asset does not exist
    """
    asset, holding = await holder_ledger.holding_of(db, asset_id, holder_id)
    return HoldingResponse(
        asset_id=asset_id,
        holder_id=holder_id,
        units=holding.units if holding else 0,
        debt=holding.debt if holding else 0,
        pending=distribution_engine.pending_for(asset, holding),
    )


@router.get("/{asset_id}/holders/{holder_id}/pending", response_model=PendingResponse)
async def pending_of(
    asset_id: int,
    holder_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PendingResponse:
    """Claimable earnings of one holder in one asset."""
    return PendingResponse(
        asset_id=asset_id,
        holder_id=holder_id,
        pending=await distribution_engine.pending_of(db, asset_id, holder_id),
    )
