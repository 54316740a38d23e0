"""Treasury repository: the pooled balance row and its movement journal."""

from sqlalchemy import select

from fleetshare.models.treasury import TREASURY_ID, FundMovement, Treasury
from fleetshare.repositories.base import BaseRepository


class TreasuryRepository(BaseRepository[Treasury]):
    """Repository for the single treasury row.

    Example:
        >>> repo = TreasuryRepository(Treasury, db)
        >>> treasury = await repo.get_or_create(for_update=True)
    """

    async def get_or_create(self, *, for_update: bool = False) -> Treasury:
        """Get the treasury row, creating an empty one on first use.

        Args:
            for_update: Lock the row until the transaction ends

        Returns:
            The treasury (flushed, not yet committed if newly created)
        """
        treasury = (
            await self.get_for_update(TREASURY_ID) if for_update else await self.get(TREASURY_ID)
        )
        if treasury is None:
            treasury = await self.create(
                obj_in={"id": TREASURY_ID, "balance": 0, "total_in": 0, "total_out": 0}
            )
        return treasury

    async def current_balance(self) -> int:
        """Treasury balance without creating the row."""
        treasury = await self.get(TREASURY_ID)
        return treasury.balance if treasury else 0


class FundMovementRepository(BaseRepository[FundMovement]):
    """Repository for the journal of value movements."""

    async def list_for_counterparty(
        self,
        counterparty_id: int,
        skip: int = 0,
        limit: int = 100,
    ) -> list[FundMovement]:
        """Get movements to or from one user, newest first.

        Args:
            counterparty_id: The user ID
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return

        Returns:
            List of fund movements
        """
        result = await self.db.execute(
            select(FundMovement)
            .where(FundMovement.counterparty_id == counterparty_id)
            .order_by(FundMovement.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())
