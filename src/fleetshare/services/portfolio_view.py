"""Service layer for a holder's derived portfolio. Pure reads."""

from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.db.session import read_only_transaction
from fleetshare.schemas.portfolio import PortfolioPosition, PortfolioResponse
from fleetshare.services.distribution_engine import pending_for
from fleetshare.services.holder_ledger import open_positions


async def portfolio_of(db: AsyncSession, holder_id: int) -> PortfolioResponse:
    """Every non-zero position of a holder, in asset enumeration order.

    A holder with no positions (including an unknown holder) gets an empty
    portfolio.

    Args:
        db: Database session
        holder_id: Holder (user) ID

    Returns:
        PortfolioResponse with ``total_value = Σ units * price_per_unit`` and
        ``total_pending = Σ pending``
    """
    async with read_only_transaction(db):
        rows = await open_positions(db, holder_id)

    positions = [
        PortfolioPosition(
            asset_id=asset.id,
            asset_name=asset.name,
            units=holding.units,
            pending=pending_for(asset, holding),
            value=holding.units * asset.price_per_unit,
        )
        for holding, asset in rows
    ]
    return PortfolioResponse(
        holder_id=holder_id,
        positions=positions,
        total_value=sum(p.value for p in positions),
        total_pending=sum(p.pending for p in positions),
    )
