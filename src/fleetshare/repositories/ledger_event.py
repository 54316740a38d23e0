"""Ledger event repository for the audit trail."""

from sqlalchemy import select

from fleetshare.models.ledger_event import LedgerEvent, LedgerEventType
from fleetshare.repositories.base import BaseRepository


class LedgerEventRepository(BaseRepository[LedgerEvent]):
    """Repository for LedgerEvent model.

    Example:
        >>> repo = LedgerEventRepository(LedgerEvent, db)
        >>> events = await repo.list_recent(asset_id=1, limit=20)
    """

    async def list_recent(
        self,
        *,
        asset_id: int | None = None,
        event_type: LedgerEventType | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[LedgerEvent]:
        """Get events newest first, optionally filtered by asset and type.

        Args:
            asset_id: Only events concerning this asset
            event_type: Only events of this type
            skip: Number of records to skip (offset)
            limit: Maximum number of records to return

        Returns:
            List of ledger events
        """
        stmt = select(LedgerEvent)
        if asset_id is not None:
            stmt = stmt.where(LedgerEvent.asset_id == asset_id)
        if event_type is not None:
            stmt = stmt.where(LedgerEvent.event_type == event_type)
        result = await self.db.execute(
            stmt.order_by(LedgerEvent.id.desc()).offset(skip).limit(limit)
        )
        return list(result.scalars().all())
