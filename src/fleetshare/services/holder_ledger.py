"""Service layer for per-(asset, holder) balances.

Holdings are created lazily on a holder's first purchase of an asset and are
never deleted; a zero-unit holding simply stops mattering.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.models.asset import Asset
from fleetshare.models.holding import Holding
from fleetshare.repositories.holding import HoldingRepository
from fleetshare.services.asset_registry import get_asset


async def find_holding(
    db: AsyncSession,
    asset_id: int,
    holder_id: int,
    *,
    for_update: bool = False,
) -> Holding | None:
    """Look up a holding.

    Returns:
        Holding if the holder ever bought this asset, None otherwise
    """
    repo = HoldingRepository(Holding, db)
    return await repo.get_by_asset_and_holder(asset_id, holder_id, for_update=for_update)


async def get_or_create_holding(db: AsyncSession, asset_id: int, holder_id: int) -> Holding:
    """Get the holder's (locked) holding, opening an empty one if needed.

    Must run inside the caller's transaction.
    """
    holding = await find_holding(db, asset_id, holder_id, for_update=True)
    if holding is None:
        holding = Holding(asset_id=asset_id, holder_id=holder_id, units=0, debt=0)
        db.add(holding)
        await db.flush()
    return holding


async def holding_of(db: AsyncSession, asset_id: int, holder_id: int) -> tuple[Asset, Holding | None]:
    """Get an asset together with the holder's holding in it.

    Raises:
        NotFoundError: If the asset does not exist
    """
    asset = await get_asset(db, asset_id)
    return asset, await find_holding(db, asset_id, holder_id)


async def open_positions(
    db: AsyncSession,
    holder_id: int,
    *,
    for_update: bool = False,
) -> list[tuple[Holding, Asset]]:
    """The holder's non-zero holdings in asset enumeration order."""
    repo = HoldingRepository(Holding, db)
    return await repo.get_open_positions(holder_id, for_update=for_update)


async def units_outstanding(db: AsyncSession, asset_id: int) -> int:
    """Sum of units over all holders of an asset.

    Always equals ``total_shares - available_shares``.
    """
    repo = HoldingRepository(Holding, db)
    return await repo.total_units_for_asset(asset_id)
