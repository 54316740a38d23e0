"""Holding repository for per-(asset, holder) balance queries."""

from sqlalchemy import func, select

from fleetshare.models.asset import Asset
from fleetshare.models.holding import Holding
from fleetshare.repositories.base import BaseRepository


class HoldingRepository(BaseRepository[Holding]):
    """Repository for Holding model with holder and asset lookups.

    Example:
        >>> repo = HoldingRepository(Holding, db)
        >>> holding = await repo.get_by_asset_and_holder(asset_id=1, holder_id=42)
    """

    async def get_by_asset_and_holder(
        self,
        asset_id: int,
        holder_id: int,
        *,
        for_update: bool = False,
    ) -> Holding | None:
        """Get the holding of one holder in one asset.

        Args:
            asset_id: The asset ID
            holder_id: The holder (user) ID
            for_update: Lock the row until the transaction ends

        Returns:
            Holding if the holder ever bought this asset, None otherwise
        """
        stmt = select(Holding).where(Holding.asset_id == asset_id, Holding.holder_id == holder_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_open_positions(
        self,
        holder_id: int,
        *,
        for_update: bool = False,
    ) -> list[tuple[Holding, Asset]]:
        """Get the holder's non-zero holdings with their assets.

        Ordered by asset id, i.e. the asset enumeration order.

        Args:
            holder_id: The holder (user) ID
            for_update: Lock the rows until the transaction ends

        Returns:
            List of (holding, asset) pairs with ``holding.units > 0``
        """
        stmt = (
            select(Holding, Asset)
            .join(Asset, Asset.id == Holding.asset_id)
            .where(Holding.holder_id == holder_id, Holding.units > 0)
            .order_by(Asset.id)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return [(holding, asset) for holding, asset in result.all()]

    async def total_units_for_asset(self, asset_id: int) -> int:
        """Sum of units held by all holders of an asset."""
        result = await self.db.execute(
            select(func.coalesce(func.sum(Holding.units), 0)).where(Holding.asset_id == asset_id)
        )
        return int(result.scalar_one())
