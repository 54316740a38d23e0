"""Portfolio endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.config import settings
from fleetshare.core.deps import CurrentActiveUser, Gateway
from fleetshare.core.rate_limit import limiter
from fleetshare.db.session import get_db
from fleetshare.schemas.distribution import ClaimAllResult
from fleetshare.schemas.portfolio import PortfolioResponse
from fleetshare.services import distribution_engine, portfolio_view

router = APIRouter()


@router.get("/me", response_model=PortfolioResponse)
async def my_portfolio(
    current_user: CurrentActiveUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PortfolioResponse:
    """Portfolio of the current user."""
    return await portfolio_view.portfolio_of(db, current_user.id)


@router.post("/claim", response_model=ClaimAllResult)
@limiter.limit(settings.TRADE_RATE_LIMIT)
async def claim_all(
    request: Request,
    current_user: CurrentActiveUser,
    gateway: Gateway,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ClaimAllResult:
    """
    Claim the current user's pending earnings on every asset at once.

    Raises:
        NothingToClaimError: If nothing is pending anywhere
    """
    return await distribution_engine.claim_all(db, gateway, holder_id=current_user.id)


@router.get("/{holder_id}", response_model=PortfolioResponse)
async def portfolio_of(
    holder_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PortfolioResponse:
    """Portfolio of any holder; empty for a holder without positions."""
    return await portfolio_view.portfolio_of(db, holder_id)
