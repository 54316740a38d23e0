"""Service layer for the append-only audit trail.

Every mutating ledger operation records one or more domain events here. The
events are written in the operation's transaction, so a rolled-back
operation leaves no trace, and they are mirrored to the application log.
Nothing in the accounting logic reads them back.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.models.ledger_event import LedgerEvent, LedgerEventType
from fleetshare.repositories.ledger_event import LedgerEventRepository

logger = logging.getLogger(__name__)


def record_event(
    db: AsyncSession,
    event_type: LedgerEventType,
    *,
    asset_id: int | None = None,
    actor_id: int | None = None,
    **payload: Any,
) -> LedgerEvent:
    """Add a domain event to the current transaction.

    Args:
        db: Database session of the running operation
        event_type: Kind of event
        asset_id: Asset the event concerns, if any
        actor_id: User who triggered the operation, if known
        **payload: Key parameters and resulting values (JSON-serializable)

    Returns:
        The pending LedgerEvent (written when the operation flushes)

    Example:
        >>> record_event(
        ...     db,
        ...     LedgerEventType.REVENUE_DEPOSITED,
        ...     asset_id=asset.id,
        ...     actor_id=admin_id,
        ...     amount=amount,
        ...     accumulator=asset.accumulator,
        ... )
    """
    event = LedgerEvent(
        event_type=event_type,
        asset_id=asset_id,
        actor_id=actor_id,
        payload=payload,
    )
    db.add(event)
    logger.info(
        f"{event_type.value}: asset={asset_id} actor={actor_id} "
        + " ".join(f"{key}={value}" for key, value in payload.items())
    )
    return event


async def list_events(
    db: AsyncSession,
    *,
    asset_id: int | None = None,
    event_type: LedgerEventType | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[LedgerEvent]:
    """Read the audit trail, newest first."""
    repo = LedgerEventRepository(LedgerEvent, db)
    return await repo.list_recent(asset_id=asset_id, event_type=event_type, skip=skip, limit=limit)
