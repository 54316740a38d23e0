"""Asset repository for vehicle catalog queries."""

from sqlalchemy import func, select

from fleetshare.models.asset import Asset
from fleetshare.repositories.base import BaseRepository


class AssetRepository(BaseRepository[Asset]):
    """Repository for Asset model.

    Assets are enumerated in creation order (ascending id), which is the
    order every cross-asset operation walks them in.

    Example:
        >>> repo = AssetRepository(Asset, db)
        >>> assets = await repo.list_in_creation_order()
    """

    async def list_in_creation_order(self) -> list[Asset]:
        """Get every asset, oldest first.

        Returns:
            List of all assets ordered by id
        """
        result = await self.db.execute(select(Asset).order_by(Asset.id))
        return list(result.scalars().all())

    async def count(self) -> int:
        """Number of registered assets."""
        result = await self.db.execute(select(func.count()).select_from(Asset))
        return int(result.scalar_one())
