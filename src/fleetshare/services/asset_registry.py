"""Service layer for the vehicle catalog.

Owns asset creation, the trading gate and enumeration. Ids are assigned
sequentially from 1 in creation order, and that order is the enumeration
order used by every cross-asset operation.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.constants import AssetConstants
from fleetshare.core.exceptions import NotFoundError, ValidationError
from fleetshare.core.reentrancy import non_reentrant
from fleetshare.db.session import transactional
from fleetshare.models.asset import Asset
from fleetshare.models.ledger_event import LedgerEventType
from fleetshare.repositories.asset import AssetRepository
from fleetshare.services.event_log import record_event

logger = logging.getLogger(__name__)


async def find_asset(db: AsyncSession, asset_id: int) -> Asset | None:
    """Look up an asset.

    Args:
        db: Database session
        asset_id: Asset ID

    Returns:
        Asset if registered, None otherwise
    """
    repo = AssetRepository(Asset, db)
    return await repo.get(asset_id)


async def get_asset(db: AsyncSession, asset_id: int, *, for_update: bool = False) -> Asset:
    """Get an asset that must exist.

    Args:
        db: Database session
        asset_id: Asset ID
        for_update: Lock the asset row until the transaction ends

    Returns:
        The asset

    Raises:
        NotFoundError: If no asset has this id
    """
    repo = AssetRepository(Asset, db)
    asset = await repo.get_for_update(asset_id) if for_update else await repo.get(asset_id)
    if asset is None:
        raise NotFoundError(f"Asset {asset_id} not found")
    return asset


async def list_assets(db: AsyncSession) -> list[Asset]:
    """Every asset in creation order."""
    return await AssetRepository(Asset, db).list_in_creation_order()


async def asset_count(db: AsyncSession) -> int:
    """Number of registered assets."""
    return await AssetRepository(Asset, db).count()


async def sold_shares_of(db: AsyncSession, asset_id: int) -> int:
    """Shares of an asset currently owned by holders.

    Raises:
        NotFoundError: If the asset does not exist
    """
    asset = await get_asset(db, asset_id)
    return asset.sold_shares


@non_reentrant
async def create_asset(
    db: AsyncSession,
    *,
    name: str,
    total_shares: int,
    price_per_unit: int,
    image_ref: str = "",
    created_by: int | None = None,
) -> Asset:
    """Register a new vehicle.

    All shares start available, the accumulator starts at 0 and trading is
    enabled.

    Args:
        db: Database session
        name: Display name (must not be blank)
        total_shares: Number of unit shares (> 0), fixed forever
        price_per_unit: Price of one share in the smallest currency unit (> 0)
        image_ref: Display image reference
        created_by: Administrator performing the operation

    Returns:
        The created asset with its assigned id

    Raises:
        ValidationError: On a blank or overlong name, an out-of-range share
            count or a non-positive price

    Example:
        >>> asset = await create_asset(db, name="Model 3 #1", total_shares=100, price_per_unit=10**16)
        >>> asset.available_shares
        100
    """
    if not name or not name.strip():
        raise ValidationError("Asset name must not be empty")
    if len(name.strip()) > AssetConstants.MAX_NAME_LENGTH:
        raise ValidationError(
            f"Asset name must be at most {AssetConstants.MAX_NAME_LENGTH} characters"
        )
    if len(image_ref) > AssetConstants.MAX_IMAGE_REF_LENGTH:
        raise ValidationError(
            f"Image reference must be at most {AssetConstants.MAX_IMAGE_REF_LENGTH} characters"
        )
    if total_shares <= 0:
        raise ValidationError("Total shares must be greater than 0")
    if total_shares > AssetConstants.MAX_TOTAL_SHARES:
        raise ValidationError(
            f"Total shares must be at most {AssetConstants.MAX_TOTAL_SHARES}"
        )
    if price_per_unit <= 0:
        raise ValidationError("Price per unit must be greater than 0")

    repo = AssetRepository(Asset, db)
    async with transactional(db):
        asset = await repo.create(
            obj_in={
                "name": name.strip(),
                "image_ref": image_ref,
                "total_shares": total_shares,
                "available_shares": total_shares,
                "price_per_unit": price_per_unit,
                "cumulative_revenue": 0,
                "cumulative_expense": 0,
                "accumulator": 0,
                "is_active": True,
            }
        )
        record_event(
            db,
            LedgerEventType.ASSET_CREATED,
            asset_id=asset.id,
            actor_id=created_by,
            name=asset.name,
            total_shares=total_shares,
            price_per_unit=price_per_unit,
        )

    return asset


@non_reentrant
async def set_asset_active(
    db: AsyncSession,
    asset_id: int,
    active: bool,
    *,
    changed_by: int | None = None,
) -> Asset:
    """Open or close trading on an asset.

    Only the flag changes; balances, deposits and claims are unaffected.

    Raises:
        NotFoundError: If the asset does not exist
    """
    async with transactional(db):
        asset = await get_asset(db, asset_id, for_update=True)
        asset.is_active = active
        record_event(
            db,
            LedgerEventType.ASSET_STATUS_CHANGED,
            asset_id=asset.id,
            actor_id=changed_by,
            is_active=active,
        )
        await db.flush()

    return asset
